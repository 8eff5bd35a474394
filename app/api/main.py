from fastapi import Depends, FastAPI
from fastapi.security import HTTPBearer

from app.api.middleware import authenticate_request, init_firebase
from app.api.routes import (
    contact_router,
    escrow_router,
    listings_router,
    profile_router,
)
from app.core.config import config
from app.core.logging_config import configure_logging
from app.db.database import init_db

security = HTTPBearer()


async def lifespan(app: FastAPI):
    # Perform startup tasks
    configure_logging()
    init_firebase()
    if not config.is_testing:
        await init_db()
    yield


app = FastAPI(
    title=config.app_name, dependencies=[Depends(security)], lifespan=lifespan
)

app.include_router(profile_router)
app.include_router(listings_router)
app.include_router(contact_router)
app.include_router(escrow_router)
app.middleware("http")(authenticate_request)
