"""Specialist services (Paslode repair, training, ...)."""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tradecounter.db.base import get_db
from tradecounter.models.service import SpecialistService
from tradecounter.schemas.catalogue import SpecialistServiceResponse

router = APIRouter(prefix="/services", tags=["services"])


@router.get("", response_model=list[SpecialistServiceResponse])
async def list_services(db: AsyncSession = Depends(get_db)):
    """Active services only, name ascending."""
    result = await db.execute(
        select(SpecialistService)
        .where(SpecialistService.is_active == True)  # noqa: E712
        .order_by(SpecialistService.name)
    )
    return [SpecialistServiceResponse.model_validate(s) for s in result.scalars().all()]
