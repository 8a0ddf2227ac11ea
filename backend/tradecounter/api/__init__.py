from fastapi import APIRouter

from .brands import router as brands_router
from .categories import router as categories_router
from .contact import router as contact_router
from .enquiries import router as enquiries_router
from .products import router as products_router
from .services import router as services_router
from .site import router as site_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(categories_router)
api_router.include_router(brands_router)
api_router.include_router(products_router)
api_router.include_router(services_router)
api_router.include_router(enquiries_router)
api_router.include_router(contact_router)
api_router.include_router(site_router)
