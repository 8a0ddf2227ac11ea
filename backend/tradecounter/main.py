from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tradecounter.api import api_router
from tradecounter.core.config import settings
from tradecounter.core.logging import setup_logging

setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title="Craighead Trade Catalogue API",
    description="Catalogue, trade enquiries and contact for Craighead Building Supplies",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "version": "0.1.0"}
