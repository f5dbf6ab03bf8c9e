from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()

API_VERSION = "1.0.0"

ENDPOINTS = [
    "POST /api/swot - Generate SWOT analysis",
    "POST /api/messaging - Generate product messaging framework",
    "POST /api/competitor - Analyze competitors (coming soon)",
    "POST /api/personas - Generate customer personas (coming soon)",
]

# Listed on 404s; coming-soon stubs are not included.
AVAILABLE_ENDPOINTS = [
    "GET / - API info",
    "POST /api/swot - SWOT analysis",
    "POST /api/messaging - Product messaging framework",
]


@router.get("/")
def root():
    return {
        "message": "Business Tools API is running!",
        "version": API_VERSION,
        "endpoints": ENDPOINTS,
    }
