from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from storefront.core.config import settings


def build_engine(database_url: str, echo: bool = False):
    """Async engine; pre-ping is enabled for everything except SQLite."""
    url = make_url(database_url)
    options = {"echo": echo}
    if url.get_backend_name() != "sqlite":
        options["pool_pre_ping"] = True
    return create_async_engine(url, **options)


engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    """Request-scoped session; rolled back if the handler raises."""
    async with async_session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
