"""
Info Router - Service banner.
"""
from fastapi import APIRouter

router = APIRouter()

FEATURES = [
    "Text extraction",
    "Headline detection",
    "Article summarization",
    "Bengali content analysis",
]

ENDPOINTS = [
    "POST /api/upload",
    "GET /api/documents",
    "GET /api/documents/:id",
    "GET /api/documents/:id/summary",
    "POST /api/documents/:id/generate-summary",
    "GET /api/search",
    "DELETE /api/documents/:id",
]


@router.get("/api")
async def api_info():
    """Service banner with the feature and endpoint lists."""
    return {
        "message": "বাংলা সংবাদপত্র ডিজিটাইজার API চালু আছে!",
        "message_english": "Bengali Newspaper Digitizer API is running!",
        "features": FEATURES,
        "endpoints": ENDPOINTS,
    }
