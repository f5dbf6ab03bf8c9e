from __future__ import annotations
from fastapi import APIRouter
from business_tools.routes.analysis import router as analysis_router
from business_tools.routes.info import router as info_router
from business_tools.routes.upcoming import router as upcoming_router

router = APIRouter()
router.include_router(info_router, tags=["info"])
router.include_router(analysis_router, prefix="/api")
router.include_router(upcoming_router, prefix="/api")
