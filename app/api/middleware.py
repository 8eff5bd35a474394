import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from firebase_admin import _apps, auth, credentials, initialize_app

from app.core.config import config

logger = logging.getLogger(__name__)

firebase_app = None


def init_firebase():
    global firebase_app
    if not _apps and not config.is_testing:
        cred = credentials.Certificate(config.firebase_credentials)
        firebase_app = initialize_app(cred)


async def authenticate_request(request: Request, call_next):
    if request.url.path.startswith(("/docs", "/openapi.json", "/redoc")):
        return await call_next(request)

    auth_header = request.headers.get("Authorization")

    if not auth_header:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": "Authorization header is missing"},
        )

    token = auth_header.split(" ")[1] if " " in auth_header else None
    if not token:
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"detail": "Invalid or missing authentication token"},
        )

    # tests provide the user through a dependency override
    if config.is_testing:
        return await call_next(request)

    try:
        user = auth.verify_id_token(token, firebase_app)
    except (ValueError, auth.InvalidIdTokenError) as e:
        logger.warning("Rejected token: %s", e)
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": f"{e}"},
        )

    request.state.user = user
    return await call_next(request)
