"""
FastAPI application entry point.

Run with::

    uvicorn a11y_reports.main:app
"""
import logging

from fastapi import FastAPI

from .api.v1.router import router as api_v1_router
from .config import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Accessibility Reports API",
    description="Accessibility scores, compliance tiers and issue reports",
    version="1.0.0",
)

app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/livez")
async def livez():
    """Liveness probe: the process is up."""
    return {"status": "ok"}
