import asyncio
import re
from typing import Awaitable, Callable

import config
from services import gemini_client, prompts
from services.analysis_service import to_model
from services.response_parser import parse_json_object
from services.schemas import ComprehensiveAnalysis, PageAnalysis, PageFailure

PAGE_MAX_TOKENS = 2000

_PAGE_RE = re.compile(r"==Start of OCR for page (\d+)==([\s\S]*?)==End of OCR for page \1==")

PageAnalyzer = Callable[[int, str, str], Awaitable[tuple[PageAnalysis, list[str]]]]


def split_pages(text: str) -> list[tuple[int, str]]:
    """Splits OCR-marked text into ordered (page_number, trimmed content) segments."""
    return [(int(match.group(1)), match.group(2).strip()) for match in _PAGE_RE.finditer(text)]


async def analyze_page_segment(page_number: int, content: str, language: str) -> tuple[PageAnalysis, list[str]]:
    """One Gemini call for one page. Returns the page analysis and its TNPSC categories."""
    prompt = prompts.build_page_analysis_prompt(page_number, content, language)
    raw = await gemini_client.generate_content(
        [gemini_client.text_part(prompt)],
        max_output_tokens=PAGE_MAX_TOKENS,
    )
    data = parse_json_object(raw)
    categories = data.get("tnpscCategories") or []
    if not isinstance(categories, list):
        categories = []
    data["pageNumber"] = page_number
    return to_model(PageAnalysis, data, raw), [str(c) for c in categories]


async def analyze_pdf_comprehensive(
    text: str,
    language: str = "english",
    *,
    min_length: int | None = None,
    batch_size: int | None = None,
    item_delay: float | None = None,
    analyze_page: PageAnalyzer | None = None,
) -> ComprehensiveAnalysis:
    """
    Analyzes every page of an OCR-marked document with one model call per page.

    A failing page is logged and recorded in failed_pages; the remaining pages
    are still processed. Pages shorter than min_length are skipped without a call.
    """
    min_length = config.PAGE_MIN_LENGTH if min_length is None else min_length
    batch_size = config.PAGE_BATCH_SIZE if batch_size is None else batch_size
    item_delay = config.PAGE_DELAY if item_delay is None else item_delay
    analyze_page = analyze_page or analyze_page_segment

    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")

    pages = split_pages(text)
    print(f"[batch] Found {len(pages)} pages to analyze")

    page_analyses: list[PageAnalysis] = []
    failed_pages: list[PageFailure] = []
    all_key_points: list[str] = []
    all_categories: list[str] = []

    for start in range(0, len(pages), batch_size):
        batch = pages[start:start + batch_size]
        print(f"[batch] Processing pages {batch[0][0]}-{batch[-1][0]}")

        for page_number, content in batch:
            if len(content) < min_length:
                print(f"[batch] Skipping page {page_number}: only {len(content)} chars")
                continue

            try:
                analysis, categories = await analyze_page(page_number, content, language)
            except Exception as e:
                print(f"[batch] Error analyzing page {page_number}: {e}")
                failed_pages.append(PageFailure(page_number=page_number, error=str(e) or type(e).__name__))
            else:
                page_analyses.append(analysis)
                all_key_points.extend(analysis.key_points)
                all_categories.extend(categories)

            # Small delay to avoid rate limiting
            await asyncio.sleep(item_delay)

    overall_summary = (
        f"Comprehensive analysis of {len(page_analyses)} pages with "
        f"{len(all_key_points)} total key points identified."
    )
    if failed_pages:
        print(f"[batch] {len(failed_pages)} page(s) failed: {[f.page_number for f in failed_pages]}")

    return ComprehensiveAnalysis(
        page_analyses=page_analyses,
        overall_summary=overall_summary,
        total_key_points=all_key_points,
        tnpsc_categories=list(dict.fromkeys(all_categories)),
        failed_pages=failed_pages,
        processed_pages=len(page_analyses),
    )
