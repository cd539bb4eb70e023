from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase on the wire (what Gemini and the frontend use), snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # Gemini sometimes sends null for fields it has nothing for; fall back to defaults
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class StudyPoint(CamelModel):
    title: str = ""
    description: str = ""
    importance: str = "medium"
    tnpsc_relevance: str = ""
    tnpsc_priority: str | None = None
    memory_tip: str | None = None


class AnalysisResult(CamelModel):
    key_points: list[str] = Field(default_factory=list)
    summary: str = ""
    tnpsc_relevance: str = ""
    study_points: list[StudyPoint] = Field(default_factory=list)
    tnpsc_categories: list[str] = Field(default_factory=list)
    main_topic: str | None = None
    difficulty: str | None = None


class PageAnalysis(CamelModel):
    page_number: int
    key_points: list[str] = Field(default_factory=list)
    study_points: list[StudyPoint] = Field(default_factory=list)
    summary: str = ""
    tnpsc_relevance: str = ""


class PageFailure(CamelModel):
    page_number: int
    error: str


class ComprehensiveAnalysis(CamelModel):
    page_analyses: list[PageAnalysis] = Field(default_factory=list)
    overall_summary: str = ""
    total_key_points: list[str] = Field(default_factory=list)
    tnpsc_categories: list[str] = Field(default_factory=list)
    failed_pages: list[PageFailure] = Field(default_factory=list)
    processed_pages: int = 0


class MatchingPairs(CamelModel):
    column_i: list[str] = Field(default_factory=list, alias="columnI")
    # to_camel would give "columnIi"
    column_ii: list[str] = Field(default_factory=list, alias="columnII")


class Question(CamelModel):
    question: str = ""
    options: list[str] = Field(default_factory=list)
    matching_pairs: MatchingPairs | None = None
    answer: str = "A"
    type: str = "mcq"
    difficulty: str | None = None
    tnpsc_group: str | None = None
    explanation: str = ""


class QuestionResult(CamelModel):
    questions: list[Question] = Field(default_factory=list)
    summary: str = ""
    key_points: list[str] = Field(default_factory=list)
    difficulty: str = "medium"
    total_questions: int = 0


class StudyHistoryRecord(CamelModel):
    id: int | str | None = None
    user_id: str | None = None
    type: Literal["analysis", "quiz"]
    file_name: str | None = None
    difficulty: str = "medium"
    language: str = "english"
    score: int | None = None
    total_questions: int | None = None
    analysis_data: AnalysisResult | None = None
    quiz_data: dict | None = None
    file_urls: list[str] = Field(default_factory=list)
    timestamp: datetime | None = None
