from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tradecounter.db.base import get_db
from tradecounter.models.brand import Brand
from tradecounter.schemas.catalogue import BrandResponse

router = APIRouter(prefix="/brands", tags=["brands"])


@router.get("", response_model=list[BrandResponse])
async def list_brands(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Brand).order_by(Brand.name))
    return [BrandResponse.model_validate(b) for b in result.scalars().all()]
