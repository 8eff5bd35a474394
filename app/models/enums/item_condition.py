from enum import Enum


class ItemCondition(str, Enum):
    NEW = "New"
    SLIGHTLY_USED = "Slightly used"
    VERY_USED = "Very used"
