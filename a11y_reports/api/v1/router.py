"""Main API router"""
from fastapi import APIRouter

from . import reports

# Create main router
router = APIRouter()

# Include sub-routers
router.include_router(reports.router, prefix="/reports", tags=["reports"])
