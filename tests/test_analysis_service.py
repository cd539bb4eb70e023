import asyncio
import json
from unittest.mock import AsyncMock, patch

import pytest

from services import analysis_service
from services.errors import EmptyPageError, MalformedResponseError

IMAGE_RESPONSE = {
    "mainTopic": "Indian Constitution",
    "studyPoints": [
        {
            "title": "Preamble",
            "description": "Declares India a sovereign socialist secular democratic republic",
            "importance": "high",
            "tnpscRelevance": "Group 1 Paper II",
            "tnpscPriority": "high",
            "memoryTip": "SSSDR: Sovereign, Socialist, Secular, Democratic, Republic",
        }
    ],
    "keyPoints": ["Adopted on 26 November 1949", "Came into force on 26 January 1950"],
    "summary": None,
    "tnpscRelevance": "Frequently asked in Group 2",
    "difficulty": "medium",
}


def run(coro):
    return asyncio.run(coro)


class TestAnalyzeImage:

    def test_parses_image_analysis(self):
        raw = "```json\n" + json.dumps(IMAGE_RESPONSE) + "\n```"
        with patch("services.analysis_service.gemini_client.generate_content", new=AsyncMock(return_value=raw)) as gen:
            result = run(analysis_service.analyze_image(b"img-bytes", "image/jpeg", "english"))

        assert result.main_topic == "Indian Constitution"
        assert result.key_points == IMAGE_RESPONSE["keyPoints"]
        assert result.study_points[0].memory_tip.startswith("SSSDR")
        # null from the model falls back to the default
        assert result.summary == ""
        assert result.tnpsc_categories == []

        parts = gen.await_args.args[0]
        assert parts[1]["inline_data"]["mime_type"] == "image/jpeg"
        assert gen.await_args.kwargs["max_output_tokens"] == analysis_service.IMAGE_MAX_TOKENS

    def test_wrong_shape_is_malformed(self):
        raw = json.dumps({"keyPoints": "not a list"})
        with patch("services.analysis_service.gemini_client.generate_content", new=AsyncMock(return_value=raw)):
            with pytest.raises(MalformedResponseError) as exc_info:
                run(analysis_service.analyze_image(b"img", "image/png"))
        assert exc_info.value.raw_text == raw

    def test_errors_propagate(self):
        with patch("services.analysis_service.gemini_client.generate_content", new=AsyncMock(return_value="oops")):
            with pytest.raises(MalformedResponseError):
                run(analysis_service.analyze_image(b"img", "image/png"))


class TestAnalyzePdf:

    def test_analyze_pdf_content(self):
        raw = json.dumps({"keyPoints": ["Article 14"], "summary": "Equality", "tnpscCategories": ["Polity"]})
        with patch("services.analysis_service.gemini_client.generate_content", new=AsyncMock(return_value=raw)) as gen:
            result = run(analysis_service.analyze_pdf_content("Right to equality ...", "tamil"))

        assert result.tnpsc_categories == ["Polity"]
        prompt = gen.await_args.args[0][0]["text"]
        assert "Right to equality ..." in prompt
        assert "Tamil" in prompt

    def test_individual_page_sets_page_number(self):
        raw = json.dumps({"keyPoints": ["a"], "summary": "s"})
        with patch("services.analysis_service.gemini_client.generate_content", new=AsyncMock(return_value=raw)):
            result = run(analysis_service.analyze_individual_page("text", 12))

        assert result.page_number == 12
        assert result.key_points == ["a"]

    def test_generate_page_analysis_rejects_empty_page(self):
        with patch("services.analysis_service.pdf_reader.extract_page_text", return_value="   \n"):
            with pytest.raises(EmptyPageError):
                run(analysis_service.generate_page_analysis(b"%PDF", 2))

    def test_generate_page_analysis_uses_page_text(self):
        raw = json.dumps({"keyPoints": ["k"]})
        with patch("services.analysis_service.pdf_reader.extract_page_text", return_value="Page two text") as extract, \
                patch("services.analysis_service.gemini_client.generate_content", new=AsyncMock(return_value=raw)) as gen:
            result = run(analysis_service.generate_page_analysis(b"%PDF", 2, "english"))

        extract.assert_called_once_with(b"%PDF", 2)
        assert "Page 2 Content: Page two text" in gen.await_args.args[0][0]["text"]
        assert result.page_number == 2
