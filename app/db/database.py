import ssl

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from app.core import config
from app.models.contact_request_model import ContactRequest  # noqa: F401
from app.models.listing_model import Listing  # noqa: F401
from app.models.profile_model import Profile  # noqa: F401
from app.models.transaction_model import Transaction  # noqa: F401

# upgrade connection to use SSL
connect_args = {}
if config.config.render_env == config.Environment.PRODUCTION:
    connect_args["ssl"] = ssl.create_default_context()

engine = create_async_engine(
    config.config.database_url,
    echo=config.config.db_echo,
    connect_args=connect_args,
)

# objects remain available after committing a transaction
async_session = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
