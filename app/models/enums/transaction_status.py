from enum import Enum


class TransactionStatus(str, Enum):
    ESCROW_PENDING = "escrow_pending"
    FUNDS_SECURED = "funds_secured"
    SHIPPED = "shipped"
    COMPLETED = "completed"