from fastapi import APIRouter

import config

router = APIRouter()


@router.get("/api/status")
async def get_status():
    """Reports which upstream services are configured."""
    return {
        "gemini": "configured" if config.GEMINI_API_KEY else "missing_api_key",
        "model": config.GEMINI_MODEL_NAME,
        "history": "configured" if config.SUPABASE_URL and config.SUPABASE_KEY else "disabled",
    }
