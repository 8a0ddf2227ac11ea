"""Static marketing shell copy."""

from fastapi import APIRouter

from tradecounter.schemas.site import CoreRange, SiteContent

router = APIRouter(prefix="/site", tags=["site"])

SITE_CONTENT = SiteContent(
    headline="BUILDING SUPPLIES",
    strapline="FIXINGS · SEALANTS · ADHESIVES · POWER TOOLS · FIRE RATED",
    mission=(
        "To support the trade with dependable building supplies, fire-rated "
        "solutions and straightforward, honest advice, delivered on time, "
        "every time."
    ),
    about=(
        "Craighead Building Supplies specialise in fixings, sealants, adhesives "
        "and fire-rated products, backed by a fully categorised online catalogue "
        "and dedicated Paslode repair & training centre."
    ),
    trade_counter=(
        "Craighead operate a specialist trade counter for fixings, sealants, "
        "adhesives, power tools and fire-rated products."
    ),
    # Selectors are resolved against the live category list by the catalogue session
    core_ranges=[
        CoreRange(label="Fixings", icon="🧱", selector="Fixings"),
        CoreRange(label="Sealants & Adhesives", icon="🧴", selector="Sealants & Adhesives"),
        CoreRange(label="Power Tools", icon="⚡", selector="Power Tools"),
        CoreRange(label="Fire Rated Products", icon="🔥", selector="Fire Rated Products"),
    ],
)


@router.get("", response_model=SiteContent)
async def get_site_content():
    return SITE_CONTENT
