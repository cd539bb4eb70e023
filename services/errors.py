"""Exceptions raised by the Gemini orchestration layer."""


class GeminiError(Exception):
    """Base class for every failure talking to or interpreting Gemini."""


class GeminiConfigError(GeminiError):
    """The service is missing configuration (e.g. no API key)."""


class GeminiClientError(GeminiError):
    """Gemini rejected the request with a 4xx status. Never retried."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP error! status: {status_code}")


class GeminiServerError(GeminiError):
    """Gemini answered with a 5xx status. Retried with backoff."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Gemini server error: status {status_code}")


class RetriesExhaustedError(GeminiError):
    """Every attempt failed with a retryable error (5xx or network)."""

    def __init__(self, attempts: int, last_error: Exception | None = None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Gemini request failed after {attempts} attempts: {last_error}")


class EmptyResponseError(GeminiError):
    """The response had no candidate text."""

    def __init__(self, message: str = "No content received from Gemini API"):
        super().__init__(message)


class MalformedResponseError(GeminiError):
    """The model text could not be parsed as JSON (or had the wrong shape)."""

    def __init__(self, raw_text: str, detail: str = ""):
        self.raw_text = raw_text
        self.detail = detail
        super().__init__(f"Failed to parse Gemini response: {detail}" if detail else "Failed to parse Gemini response")


class NoValidImagesError(ValueError):
    """None of the uploaded files were images."""


class EmptyPageError(ValueError):
    """A PDF page had no extractable text."""
