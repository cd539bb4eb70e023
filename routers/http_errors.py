from fastapi import HTTPException

from services.errors import (
    EmptyResponseError,
    GeminiClientError,
    GeminiConfigError,
    MalformedResponseError,
    RetriesExhaustedError,
)


def to_http_exception(e: Exception) -> HTTPException:
    """Maps service failures onto the status codes the frontend expects."""
    if isinstance(e, HTTPException):
        return e
    if isinstance(e, GeminiConfigError):
        return HTTPException(status_code=500, detail=str(e))
    if isinstance(e, GeminiClientError):
        return HTTPException(status_code=502, detail=f"Gemini rejected the request (status {e.status_code})")
    if isinstance(e, RetriesExhaustedError):
        return HTTPException(status_code=503, detail="Gemini is unavailable, please try again later")
    if isinstance(e, (MalformedResponseError, EmptyResponseError)):
        return HTTPException(status_code=502, detail=str(e))
    if isinstance(e, ValueError):
        # NoValidImagesError, EmptyPageError, bad language, ...
        return HTTPException(status_code=400, detail=str(e))
    print(f"Unexpected error: {e}")
    return HTTPException(status_code=500, detail="Sorry, I encountered an error trying to respond.")
