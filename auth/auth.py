import asyncio
from fastapi import HTTPException, Request

from services.history_service import HistoryUnavailableError, get_supabase


# --- Token Verification (Supabase bearer token) ---
async def verify_supabase_token(request: Request) -> str:
    """Returns the Supabase user id for the request's bearer token, or raises 401."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        print("Verification failed: Missing or invalid Authorization header")
        raise HTTPException(status_code=401, detail="Missing or invalid Authorization header")

    token = auth_header.split(" ", 1)[1].strip()
    try:
        supabase = get_supabase()
    except HistoryUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))

    try:
        user_response = await asyncio.to_thread(supabase.auth.get_user, token)
    except Exception as e:
        print(f"Error validating token: {e}")
        raise HTTPException(status_code=401, detail="Token validation failed")

    user = user_response.user if user_response else None
    if not user:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    print(f"✅ Session check OK: user_id={user.id}")
    return user.id
