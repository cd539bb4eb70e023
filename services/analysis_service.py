import asyncio
from pydantic import BaseModel, ValidationError

from services import gemini_client, pdf_reader, prompts
from services.errors import EmptyPageError, MalformedResponseError
from services.response_parser import parse_json_object
from services.schemas import AnalysisResult, PageAnalysis

IMAGE_MAX_TOKENS = 4000
PDF_MAX_TOKENS = 4000
INDIVIDUAL_PAGE_MAX_TOKENS = 5000


def to_model(model: type[BaseModel], data: dict, raw: str):
    """Validates parsed model output, reporting shape errors as malformed responses."""
    try:
        return model.model_validate(data)
    except ValidationError as e:
        print(f"[analysis_service] Response did not match {model.__name__}: {e}")
        raise MalformedResponseError(raw, str(e)) from e


async def analyze_image(data: bytes, mime_type: str, language: str = "english") -> AnalysisResult:
    """Extracts study points, key points and TNPSC relevance from one image."""
    prompt = prompts.build_image_analysis_prompt(language)
    print(f"[analyze_image] Sending {mime_type} image ({len(data)} bytes) to Gemini.")
    raw = await gemini_client.generate_content(
        [gemini_client.text_part(prompt), gemini_client.image_part(data, mime_type)],
        max_output_tokens=IMAGE_MAX_TOKENS,
    )
    print(f"[analyze_image] Raw Gemini response: {raw[:200]}...")
    return to_model(AnalysisResult, parse_json_object(raw), raw)


async def analyze_pdf_content(text: str, language: str = "english") -> AnalysisResult:
    """Analyzes the text of a whole PDF in one call (truncated to the prompt limit)."""
    prompt = prompts.build_pdf_analysis_prompt(text, language)
    print(f"[analyze_pdf_content] Sending prompt to Gemini (length: {len(prompt)} chars).")
    raw = await gemini_client.generate_content(
        [gemini_client.text_part(prompt)],
        max_output_tokens=PDF_MAX_TOKENS,
    )
    return to_model(AnalysisResult, parse_json_object(raw), raw)


async def analyze_individual_page(text: str, page_number: int, language: str = "english") -> PageAnalysis:
    prompt = prompts.build_individual_page_prompt(page_number, text, language)
    raw = await gemini_client.generate_content(
        [gemini_client.text_part(prompt)],
        max_output_tokens=INDIVIDUAL_PAGE_MAX_TOKENS,
    )
    data = parse_json_object(raw)
    data["pageNumber"] = page_number
    return to_model(PageAnalysis, data, raw)


async def generate_page_analysis(pdf_bytes: bytes, page_number: int, language: str = "english") -> PageAnalysis:
    """Pulls one page out of a PDF and analyzes it on its own."""
    text = await asyncio.to_thread(pdf_reader.extract_page_text, pdf_bytes, page_number)
    if not text.strip():
        raise EmptyPageError("No text content found on this page")
    return await analyze_individual_page(text, page_number, language)
