import asyncio
from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from routers.http_errors import to_http_exception
from services import analysis_service, batch_service, pdf_reader, quiz_service
from services.schemas import AnalysisResult, CamelModel, ComprehensiveAnalysis, PageAnalysis, QuestionResult

PDF_MIME = "application/pdf"

router = APIRouter()


class QuestionRequest(CamelModel):
    analyses: list[AnalysisResult]
    difficulty: str = "medium"
    language: str = "english"


async def _read_pdf(file: UploadFile) -> bytes:
    if file.content_type and file.content_type != PDF_MIME:
        raise HTTPException(status_code=400, detail=f"Expected a PDF, got {file.content_type}")
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    return data


@router.post("/analyze/image", response_model=AnalysisResult)
async def analyze_image(file: UploadFile = File(...), language: str = Form("english")):
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=400, detail="Please upload an image file")
    try:
        return await analysis_service.analyze_image(await file.read(), file.content_type, language)
    except Exception as e:
        raise to_http_exception(e)


@router.post("/analyze/images", response_model=QuestionResult)
async def analyze_images(
    files: list[UploadFile] = File(...),
    difficulty: str = Form("medium"),
    language: str = Form("english"),
):
    """Analyzes every uploaded image and returns one quiz built from all of them."""
    try:
        images = [(await f.read(), f.content_type or "") for f in files]
        return await quiz_service.analyze_multiple_images(images, difficulty, language)
    except Exception as e:
        raise to_http_exception(e)


@router.post("/analyze/pdf", response_model=AnalysisResult)
async def analyze_pdf(file: UploadFile = File(...), language: str = Form("english")):
    data = await _read_pdf(file)
    try:
        text = await asyncio.to_thread(pdf_reader.extract_full_text, data)
        if not text:
            raise HTTPException(status_code=400, detail="No text content found in this PDF")
        return await analysis_service.analyze_pdf_content(text, language)
    except Exception as e:
        raise to_http_exception(e)


@router.post("/analyze/pdf/comprehensive", response_model=ComprehensiveAnalysis)
async def analyze_pdf_comprehensive(file: UploadFile = File(...), language: str = Form("english")):
    """Page-by-page analysis. Individual page failures come back in failedPages."""
    data = await _read_pdf(file)
    try:
        marked_text = await asyncio.to_thread(pdf_reader.extract_marked_text, data)
        return await batch_service.analyze_pdf_comprehensive(marked_text, language)
    except Exception as e:
        raise to_http_exception(e)


@router.post("/analyze/pdf/page/{page_number}", response_model=PageAnalysis)
async def analyze_pdf_page(page_number: int, file: UploadFile = File(...), language: str = Form("english")):
    data = await _read_pdf(file)
    try:
        return await analysis_service.generate_page_analysis(data, page_number, language)
    except Exception as e:
        raise to_http_exception(e)


@router.post("/questions", response_model=QuestionResult)
async def generate_questions(request: QuestionRequest):
    try:
        return await quiz_service.generate_questions(request.analyses, request.difficulty, request.language)
    except Exception as e:
        raise to_http_exception(e)
