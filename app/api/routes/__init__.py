from .contact_route import router as contact_router
from .escrow_route import router as escrow_router
from .listings_route import router as listings_router
from .profile_route import router as profile_router

__all__ = ["contact_router", "escrow_router", "listings_router", "profile_router"]
