from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.core.errors import InvalidInputError
from storefront.db.session import get_db
from storefront.schemas.product import SeedResponse
from storefront.services.seed import seed_products


router = APIRouter(prefix="/api/v1", tags=["seed"])


@router.post("/seed", response_model=SeedResponse, status_code=status.HTTP_201_CREATED)
async def seed(db: AsyncSession = Depends(get_db)):
    try:
        return await seed_products(db)
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
