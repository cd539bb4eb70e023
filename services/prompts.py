from langchain_core.prompts import PromptTemplate

LANGUAGES = ("english", "tamil")

PDF_CONTENT_LIMIT = 8000
PAGE_CONTENT_LIMIT = 4000


def language_instruction(language: str, strict_script: bool = False, questions: bool = False) -> str:
    if language not in LANGUAGES:
        raise ValueError(f"Unsupported output language: {language!r}")
    if questions:
        name = "Tamil" if language == "tamil" else "English"
        return f"Please provide all questions and answers in {name} language."
    if language == "tamil":
        if strict_script:
            return "Please provide all responses in Tamil language. Use Tamil script for all content."
        return "Please provide all responses in Tamil language."
    return "Please provide all responses in English language."


# JSON shape shared by the whole-document prompts (image and PDF)
_ANALYSIS_JSON_SHAPE = """{{
  "mainTopic": "Main topic of the content",
  "studyPoints": [
    {{
      "title": "Specific, focused study point title",
      "description": "Comprehensive description with facts, figures, context, and significance",
      "importance": "high/medium/low",
      "tnpscRelevance": "Specific TNPSC Group/Paper reference and exam importance with previous year question patterns",
      "tnpscPriority": "high/medium/low",
      "memoryTip": "Scientific memory technique (mnemonic/acronym/visual association/story method) with specific recall triggers"
    }}
  ],
  "keyPoints": ["Fact-based crisp point 1", "Constitutional/Legal point 2", "Historical/Geographical point 3"],
  "summary": "Overall summary of the content",
  "tnpscRelevance": "Detailed TNPSC exam relevance with specific Group 1/2/4 paper references, weightage, and question pattern analysis",
  "tnpscCategories": ["Specific TNPSC subject/topic categories"],
  "difficulty": "easy/medium/hard"
}}"""

image_analysis_template = """
You are an expert TNPSC examiner and educator with deep knowledge of Tamil Nadu Public Service Commission exam patterns, syllabus, and requirements. Analyze this image with the highest level of intelligence and academic rigor.

{language_instruction}

CRITICAL INSTRUCTIONS:
1. Extract ONLY educationally valuable and exam-relevant content
2. Focus on factual information, concepts, definitions, historical events, geographical data, scientific principles, constitutional articles, government schemes, etc.
3. Ignore decorative elements, irrelevant graphics, or non-educational content
4. Provide deep analytical insights, not surface-level observations
5. Connect every point to TNPSC exam relevance with specific group/paper references
6. Create memory techniques that are scientifically proven (mnemonics, acronyms, visual associations, story methods)

Provide COMPREHENSIVE analysis in this JSON format:
""" + _ANALYSIS_JSON_SHAPE + """

MANDATORY REQUIREMENTS:
- Generate 15-20 key points minimum (only factual, exam-relevant content)
- Create 8-12 detailed study points minimum with comprehensive descriptions
- Every study point MUST have a scientific memory technique
- Include numerical data, dates, names, places, percentages, statistics wherever visible

QUALITY CHECK: Every point should be something a TNPSC aspirant would find in their textbook or previous year questions.
"""
IMAGE_ANALYSIS_PROMPT = PromptTemplate(
    input_variables=["language_instruction"],
    template=image_analysis_template,
)

pdf_analysis_template = """
You are an expert TNPSC examiner and academic content analyst. Analyze this PDF content with the highest level of intelligence and academic rigor.

{language_instruction}

Content: {content}

CRITICAL INTELLIGENCE REQUIREMENTS:
1. Extract ONLY high-value educational content relevant to TNPSC exams
2. Focus on factual information, concepts, policies, schemes, historical data, geographical features, constitutional provisions
3. Ignore irrelevant or decorative content
4. Provide deep insights with TNPSC-specific relevance

Provide analysis in this JSON format:
""" + _ANALYSIS_JSON_SHAPE + """

MANDATORY FOCUS AREAS:
- Generate 15-20 key points minimum (only high-value educational content)
- Create 10-15 detailed study points minimum
- Every study point MUST have a scientific memory technique
- Include numerical data, percentages, dates, names, places wherever present
"""
PDF_ANALYSIS_PROMPT = PromptTemplate(
    input_variables=["language_instruction", "content"],
    template=pdf_analysis_template,
)

# Used once per page by the batch orchestrator, so kept short
page_analysis_template = """
Analyze this PDF page content for TNPSC exam preparation:

{language_instruction}

Page {page_number} Content: {content}

Please provide analysis in JSON format:
{{
  "keyPoints": ["Short crisp key point 1", "Short crisp key point 2", "Short crisp key point 3"],
  "studyPoints": [
    {{
      "title": "Study point title",
      "description": "Detailed description",
      "importance": "high/medium/low",
      "tnpscRelevance": "TNPSC relevance explanation",
      "memoryTip": "Easy memory tip for students"
    }}
  ],
  "summary": "Brief summary of the page content",
  "tnpscRelevance": "How this content relates to TNPSC exams",
  "tnpscCategories": ["Category1", "Category2"]
}}

Focus on:
- Extract COMPREHENSIVE key points from the page (aim for 12+ key points minimum)
- MANDATORY: Provide memory tips for EVERY study point
- Important facts and concepts, TNPSC exam relevance
- Don't miss any detail that could be relevant for TNPSC preparation
"""
PAGE_ANALYSIS_PROMPT = PromptTemplate(
    input_variables=["language_instruction", "page_number", "content"],
    template=page_analysis_template,
)

individual_page_template = """
You are an expert TNPSC content analyst with deep academic expertise. Analyze this individual PDF page with maximum intelligence and educational rigor.

{language_instruction}

Page {page_number} Content: {content}

CRITICAL INTELLIGENCE STANDARDS:
1. Extract ONLY academically valuable, exam-relevant educational content
2. Ignore decorative, irrelevant, or non-educational content
3. Provide deep analytical insights with specific TNPSC exam connections
4. Create advanced memory techniques using proven cognitive science methods

Provide analysis in JSON format:
{{
  "keyPoints": ["Constitutional article/provision with number", "Historical event with specific date/year", "Geographical feature with precise location"],
  "studyPoints": [
    {{
      "title": "Academically precise and specific title",
      "description": "Comprehensive description with context, significance, facts and figures",
      "importance": "high/medium/low",
      "tnpscRelevance": "Specific TNPSC Group/Paper/Subject reference with syllabus alignment",
      "memoryTip": "Memory technique (acronyms, mnemonics, visual imagery, story method) with specific recall triggers"
    }}
  ],
  "summary": "Comprehensive academic summary highlighting key educational concepts",
  "tnpscRelevance": "Detailed TNPSC exam relevance with syllabus topic connections"
}}

MANDATORY EXTRACTION EXCELLENCE:
- Generate 25-30 key points minimum
- Create 18-25 detailed study points minimum
- Include ALL numerical data, percentages, dates, names, places, statistics, years, figures
"""
INDIVIDUAL_PAGE_PROMPT = PromptTemplate(
    input_variables=["language_instruction", "page_number", "content"],
    template=individual_page_template,
)

question_generation_template = """
You are an expert TNPSC question paper setter with deep knowledge of exam patterns. Generate 20-25 high-quality questions based on the following content:

Content Analysis:
{content_analysis}

Difficulty Level: {difficulty}
{language_instruction}

Generate these types of questions in exact proportions:
- Regular Multiple Choice Questions (4 options) - 50%
- Assertion-Reason Questions - 25%
- Match the Following Questions - 25%

For Regular MCQ questions provide 4 clear, distinct options (A, B, C, D).
IMPORTANT: The "answer" field should contain ONLY the option letter (A, B, C, or D), not the full option text.

For Assertion-Reason questions:
Format: "Assertion (A): [statement] Reason (R): [statement]"
Options:
(A) Both A and R are true and R is the correct explanation of A
(B) Both A and R are true but R is not the correct explanation of A
(C) A is true but R is false
(D) A is false but R is true

For Match the Following questions:
Format: "Match the following:"
Column I: [4 items labeled (a), (b), (c), (d)]
Column II: [4 items labeled 1, 2, 3, 4]

Return as a JSON array:
[
  {{
    "question": "Question text here",
    "options": ["Option A", "Option B", "Option C", "Option D"],
    "matchingPairs": {{
      "columnI": ["Item (a)", "Item (b)", "Item (c)", "Item (d)"],
      "columnII": ["Item 1", "Item 2", "Item 3", "Item 4"]
    }},
    "answer": "A",
    "type": "mcq" | "assertion_reason" | "match_following",
    "difficulty": "{difficulty}",
    "tnpscGroup": "Group 1" | "Group 2" | "Group 4",
    "explanation": "Detailed explanation with TNPSC context and learning points"
  }}
]

CRITICAL:
- Answer field contains only the letter (A, B, C, or D)
- Only include "matchingPairs" for Match the Following questions
- Ensure all questions are directly based on the analyzed content
"""
QUESTION_GENERATION_PROMPT = PromptTemplate(
    input_variables=["content_analysis", "difficulty", "language_instruction"],
    template=question_generation_template,
)


def build_image_analysis_prompt(language: str) -> str:
    return IMAGE_ANALYSIS_PROMPT.format(
        language_instruction=language_instruction(language, strict_script=True),
    )


def build_pdf_analysis_prompt(text: str, language: str) -> str:
    return PDF_ANALYSIS_PROMPT.format(
        language_instruction=language_instruction(language, strict_script=True),
        content=text[:PDF_CONTENT_LIMIT],
    )


def build_page_analysis_prompt(page_number: int, text: str, language: str) -> str:
    return PAGE_ANALYSIS_PROMPT.format(
        language_instruction=language_instruction(language),
        page_number=page_number,
        content=text[:PAGE_CONTENT_LIMIT],
    )


def build_individual_page_prompt(page_number: int, text: str, language: str) -> str:
    return INDIVIDUAL_PAGE_PROMPT.format(
        language_instruction=language_instruction(language),
        page_number=page_number,
        content=text[:PAGE_CONTENT_LIMIT],
    )


def build_question_prompt(analyses, difficulty: str, language: str) -> str:
    """analyses: AnalysisResult-like objects (key_points, summary, tnpsc_relevance)."""
    sections = [
        f"Analysis {index}:\n"
        f"Key Points: {chr(10).join(analysis.key_points)}\n"
        f"Summary: {analysis.summary}\n"
        f"TNPSC Relevance: {analysis.tnpsc_relevance}\n"
        for index, analysis in enumerate(analyses, start=1)
    ]
    return QUESTION_GENERATION_PROMPT.format(
        content_analysis="\n".join(sections),
        difficulty=difficulty,
        language_instruction=language_instruction(language, questions=True),
    )
