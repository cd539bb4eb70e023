from services import analysis_service, gemini_client, prompts
from services.errors import MalformedResponseError, NoValidImagesError
from services.response_parser import parse_json_array
from services.schemas import AnalysisResult, Question, QuestionResult

QUESTION_MAX_TOKENS = 5000
PLACEHOLDER_OPTIONS = ["Option A", "Option B", "Option C", "Option D"]


def normalize_question(raw_question: dict) -> dict:
    """Fills the defaults the quiz UI relies on."""
    question = dict(raw_question)
    question["type"] = question.get("type") or "mcq"
    if not isinstance(question.get("options"), list):
        question["options"] = list(PLACEHOLDER_OPTIONS)
    question["answer"] = question.get("answer") or "A"
    question["matchingPairs"] = question.get("matchingPairs") or None
    return question


async def generate_questions(
    analyses: list[AnalysisResult],
    difficulty: str = "medium",
    language: str = "english",
) -> QuestionResult:
    """Generates a TNPSC-style quiz (MCQ, assertion-reason, match the following) from analyses."""
    if not analyses:
        raise ValueError("At least one analysis is required to generate questions")

    prompt = prompts.build_question_prompt(analyses, difficulty, language)
    print(f"[generate_questions] Requesting {difficulty} questions from {len(analyses)} analyses.")
    raw = await gemini_client.generate_content(
        [gemini_client.text_part(prompt)],
        max_output_tokens=QUESTION_MAX_TOKENS,
    )

    questions = []
    for item in parse_json_array(raw):
        if not isinstance(item, dict):
            raise MalformedResponseError(raw, "question entries must be JSON objects")
        questions.append(analysis_service.to_model(Question, normalize_question(item), raw))

    return QuestionResult(
        questions=questions,
        summary=" ".join(analysis.summary for analysis in analyses),
        key_points=[point for analysis in analyses for point in analysis.key_points],
        difficulty=difficulty,
        total_questions=len(questions),
    )


async def analyze_multiple_images(
    images: list[tuple[bytes, str]],
    difficulty: str = "medium",
    language: str = "english",
) -> QuestionResult:
    """
    Analyzes each image in turn, then builds one quiz from all of them.

    images: (data, mime_type) pairs. Non-image files are skipped.
    """
    analyses = []
    for data, mime_type in images:
        if not (mime_type or "").startswith("image/"):
            print(f"[analyze_multiple_images] Skipping non-image file ({mime_type}).")
            continue
        analyses.append(await analysis_service.analyze_image(data, mime_type, language))

    if not analyses:
        raise NoValidImagesError("No valid images found for analysis")

    return await generate_questions(analyses, difficulty, language)
