"""Tests for the page-by-page PDF orchestrator."""

import asyncio
import json
from unittest.mock import AsyncMock, patch

from services import batch_service
from services.errors import RetriesExhaustedError
from services.pdf_reader import mark_pages
from services.schemas import PageAnalysis


def page_text(number: int) -> str:
    return f"Page {number} covers the Panchayati Raj system and the 73rd Constitutional Amendment Act of 1992."


def fake_analyzer(fail_on=()):
    """Page analyzer that succeeds with two key points per page, except for pages in fail_on."""
    calls = []

    async def analyze(page_number, content, language):
        calls.append(page_number)
        if page_number in fail_on:
            raise RetriesExhaustedError(4, None)
        analysis = PageAnalysis(
            page_number=page_number,
            key_points=[f"p{page_number}-a", f"p{page_number}-b"],
            summary=f"Summary {page_number}",
        )
        return analysis, ["Polity", f"Category {page_number % 2}"]

    return analyze, calls


def run(coro):
    return asyncio.run(coro)


class TestSplitPages:

    def test_splits_in_order_and_trims(self):
        text = mark_pages(["  first page  ", "second page"])
        assert batch_service.split_pages(text) == [(1, "first page"), (2, "second page")]

    def test_mismatched_markers_are_ignored(self):
        text = "==Start of OCR for page 1==abc==End of OCR for page 2=="
        assert batch_service.split_pages(text) == []


class TestAnalyzePdfComprehensive:

    def test_one_failing_page_does_not_abort(self):
        """5 pages, page 3 fails: the other 4 are kept and the failure is recorded."""
        analyze, calls = fake_analyzer(fail_on={3})
        text = mark_pages([page_text(n) for n in range(1, 6)])

        result = run(batch_service.analyze_pdf_comprehensive(
            text, "english", item_delay=0, analyze_page=analyze,
        ))

        assert calls == [1, 2, 3, 4, 5]
        assert result.processed_pages == 4
        assert [p.page_number for p in result.page_analyses] == [1, 2, 4, 5]
        assert result.total_key_points == ["p1-a", "p1-b", "p2-a", "p2-b", "p4-a", "p4-b", "p5-a", "p5-b"]
        assert [f.page_number for f in result.failed_pages] == [3]
        assert "failed after 4 attempts" in result.failed_pages[0].error
        assert result.overall_summary == "Comprehensive analysis of 4 pages with 8 total key points identified."

    def test_categories_deduplicated_in_first_seen_order(self):
        analyze, _ = fake_analyzer()
        text = mark_pages([page_text(n) for n in range(1, 4)])

        result = run(batch_service.analyze_pdf_comprehensive(text, item_delay=0, analyze_page=analyze))

        assert result.tnpsc_categories == ["Polity", "Category 1", "Category 0"]

    def test_short_pages_are_skipped_without_a_call(self):
        analyze, calls = fake_analyzer()
        text = mark_pages([page_text(1), "Index", page_text(3)])

        with patch("services.batch_service.asyncio.sleep", new_callable=AsyncMock) as sleep:
            result = run(batch_service.analyze_pdf_comprehensive(text, item_delay=0.5, analyze_page=analyze))

        assert calls == [1, 3]
        assert result.processed_pages == 2
        assert result.failed_pages == []
        # one rate-limit pause per attempted page
        assert sleep.await_count == 2
        sleep.assert_awaited_with(0.5)

    def test_pages_beyond_one_batch_are_processed(self):
        analyze, calls = fake_analyzer()
        text = mark_pages([page_text(n) for n in range(1, 8)])

        result = run(batch_service.analyze_pdf_comprehensive(text, batch_size=3, item_delay=0, analyze_page=analyze))

        assert calls == list(range(1, 8))
        assert result.processed_pages == 7

    def test_all_pages_failing_is_still_a_result(self):
        analyze, _ = fake_analyzer(fail_on={1, 2})
        text = mark_pages([page_text(1), page_text(2)])

        result = run(batch_service.analyze_pdf_comprehensive(text, item_delay=0, analyze_page=analyze))

        assert result.processed_pages == 0
        assert result.page_analyses == []
        assert len(result.failed_pages) == 2

    def test_custom_analyzer_is_used_by_keyword(self):
        analyze, calls = fake_analyzer()
        text = mark_pages([page_text(1)])

        with patch("services.batch_service.analyze_page_segment", new=AsyncMock()) as default:
            result = run(batch_service.analyze_pdf_comprehensive(text, item_delay=0, analyze_page=analyze))

        default.assert_not_awaited()
        assert calls == [1]
        assert result.processed_pages == 1

    def test_no_pages(self):
        result = run(batch_service.analyze_pdf_comprehensive("no markers here", item_delay=0))
        assert result.processed_pages == 0
        assert result.overall_summary == "Comprehensive analysis of 0 pages with 0 total key points identified."


class TestAnalyzePageSegment:

    def test_parses_fenced_page_response(self):
        body = {
            "keyPoints": ["Gram Sabha is the base", "Three-tier structure"],
            "studyPoints": [{"title": "PRI", "description": "Local self-government", "importance": "high"}],
            "summary": "Panchayati Raj",
            "tnpscRelevance": None,
            "tnpscCategories": ["Polity"],
        }
        raw = "```json\n" + json.dumps(body) + "\n```"
        with patch("services.batch_service.gemini_client.generate_content", new=AsyncMock(return_value=raw)) as gen:
            analysis, categories = run(batch_service.analyze_page_segment(4, page_text(4), "english"))

        assert analysis.page_number == 4
        assert analysis.key_points == body["keyPoints"]
        assert analysis.study_points[0].title == "PRI"
        assert analysis.tnpsc_relevance == ""
        assert categories == ["Polity"]
        assert gen.await_args.kwargs["max_output_tokens"] == batch_service.PAGE_MAX_TOKENS

    def test_malformed_page_is_recorded_as_failure(self):
        text = mark_pages([page_text(1), page_text(2)])
        responses = ["not json at all", json.dumps({"keyPoints": ["ok"], "summary": "fine"})]

        with patch("services.batch_service.gemini_client.generate_content", new=AsyncMock(side_effect=responses)):
            result = run(batch_service.analyze_pdf_comprehensive(text, item_delay=0))

        assert result.processed_pages == 1
        assert result.page_analyses[0].page_number == 2
        assert result.failed_pages[0].page_number == 1
        assert result.failed_pages[0].error.startswith("Failed to parse Gemini response")
