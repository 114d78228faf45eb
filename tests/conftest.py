import pytest
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.db.base import Base
from storefront.db.models import Product, ProductVariation


DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    engine = create_async_engine(DATABASE_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


async def make_variation(db_session, base_price, price_adjustment, sku, stock_quantity=10, category="shirts"):
    product = Product(
        name=f"Product {sku}",
        description="Test product",
        base_price=Decimal(base_price),
        category=category,
        image_url=None
    )
    db_session.add(product)
    await db_session.flush()

    variation = ProductVariation(
        product_id=product.id,
        size="M",
        color="Blue",
        price_adjustment=Decimal(price_adjustment),
        stock_quantity=stock_quantity,
        sku=sku
    )
    db_session.add(variation)
    await db_session.commit()
    await db_session.refresh(variation)
    return variation


@pytest.fixture
async def variation(db_session):
    """base_price 10.00, price_adjustment +2.50"""
    return await make_variation(db_session, "10.00", "2.50", "SHIRT-BLUE-M")


@pytest.fixture
async def discounted_variation(db_session):
    """base_price 29.99, price_adjustment -2.50"""
    return await make_variation(db_session, "29.99", "-2.50", "PANTS-BLUE-M", category="pants")


@pytest.fixture
async def client(session_factory):
    from storefront.main import app
    from storefront.db.session import get_db

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def file_session_factory(tmp_path):
    """Sessions on a file-backed database, so each session gets its own connection."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'storefront.db'}", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()
