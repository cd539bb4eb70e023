import asyncio
import base64
import httpx

import config
from services.errors import (
    EmptyResponseError,
    GeminiClientError,
    GeminiConfigError,
    GeminiServerError,
    MalformedResponseError,
    RetriesExhaustedError,
)


def generate_content_url(model_name: str | None = None) -> str:
    model = model_name or config.GEMINI_MODEL_NAME
    return f"{config.GEMINI_API_BASE}/models/{model}:generateContent"


def text_part(text: str) -> dict:
    return {"text": text}


def image_part(data: bytes, mime_type: str) -> dict:
    """Inline image part; Gemini expects raw base64 without a data: prefix."""
    return {
        "inline_data": {
            "mime_type": mime_type,
            "data": base64.b64encode(data).decode("ascii"),
        }
    }


async def _send_with_retry(
    client: httpx.AsyncClient,
    url: str,
    payload: dict,
    max_retries: int,
    initial_delay: float,
) -> dict:
    attempts = max_retries + 1
    delay = initial_delay
    last_error: Exception | None = None

    for attempt in range(1, attempts + 1):
        try:
            response = await client.post(url, params={"key": config.GEMINI_API_KEY}, json=payload)
        except httpx.RequestError as exc:
            print(f"[gemini_client] Attempt {attempt}/{attempts} network error: {exc}")
            last_error = exc
        else:
            if response.is_success:
                try:
                    return response.json()
                except ValueError as exc:
                    raise MalformedResponseError(response.text, str(exc)) from exc

            if response.status_code >= 500:
                print(f"[gemini_client] Attempt {attempt}/{attempts} server error: {response.status_code}")
                last_error = GeminiServerError(response.status_code, response.text)
            else:
                # 4xx will not get better by asking again
                print(f"[gemini_client] Client error {response.status_code}, not retrying: {response.text[:200]}")
                raise GeminiClientError(response.status_code, response.text)

        if attempt < attempts:
            print(f"[gemini_client] Retrying in {delay:.1f}s...")
            await asyncio.sleep(delay)
            delay *= 2

    raise RetriesExhaustedError(attempts, last_error)


async def post_with_retry(
    payload: dict,
    max_retries: int | None = None,
    initial_delay: float | None = None,
    client: httpx.AsyncClient | None = None,
) -> dict:
    """
    POSTs a generateContent request, retrying 5xx and network failures with
    exponential backoff.

    Args:
        payload: The JSON request body.
        max_retries: Retries after the first attempt (defaults to GEMINI_MAX_RETRIES).
        initial_delay: Seconds to wait before the first retry; doubled after each one.
        client: Optional shared client. One is created (and closed) per call otherwise.

    Returns:
        The decoded JSON body of the first 2xx response.

    Raises:
        GeminiConfigError: No API key is configured.
        GeminiClientError: Gemini answered 4xx (no retry).
        RetriesExhaustedError: Every attempt failed with 5xx or a network error.
    """
    if not config.GEMINI_API_KEY:
        raise GeminiConfigError("Gemini service not configured.")

    max_retries = config.GEMINI_MAX_RETRIES if max_retries is None else max_retries
    initial_delay = config.GEMINI_INITIAL_DELAY if initial_delay is None else initial_delay
    url = generate_content_url()

    if client is None:
        async with httpx.AsyncClient(timeout=config.GEMINI_TIMEOUT) as owned_client:
            return await _send_with_retry(owned_client, url, payload, max_retries, initial_delay)
    return await _send_with_retry(client, url, payload, max_retries, initial_delay)


def extract_text(data: dict) -> str:
    """Pulls candidates[0].content.parts[0].text out of a generateContent response."""
    try:
        text = data["candidates"][0]["content"]["parts"][0].get("text")
    except (KeyError, IndexError, TypeError, AttributeError):
        text = None
    if not text:
        raise EmptyResponseError()
    return text


async def generate_content(
    parts: list[dict],
    max_output_tokens: int,
    temperature: float = 0.7,
    client: httpx.AsyncClient | None = None,
) -> str:
    payload = {
        "contents": [{"parts": parts}],
        "generationConfig": {
            "temperature": temperature,
            "maxOutputTokens": max_output_tokens,
        },
    }
    data = await post_with_retry(payload, client=client)
    return extract_text(data)
