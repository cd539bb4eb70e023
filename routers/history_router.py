import asyncio
from fastapi import APIRouter, Depends, HTTPException, Query

from auth.auth import verify_supabase_token
from routers.http_errors import to_http_exception
from services import history_service, quiz_service
from services.history_service import HistoryUnavailableError
from services.schemas import QuestionResult, StudyHistoryRecord

router = APIRouter()


async def _load_record(record_id: str, user_id: str) -> StudyHistoryRecord:
    record = await asyncio.to_thread(history_service.get_study_record, record_id, user_id)
    if not record:
        raise HTTPException(status_code=404, detail="Record not found")
    return record


@router.get("/history", response_model=list[StudyHistoryRecord])
async def list_history(
    record_type: str = Query("all", alias="type"),
    difficulty: str = "all",
    language: str = "all",
    search: str = "",
    user_id: str = Depends(verify_supabase_token),
):
    try:
        records = await asyncio.to_thread(history_service.get_study_history, user_id)
    except HistoryUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        print(f"Error fetching study history: {e}")
        raise HTTPException(status_code=500, detail="Failed to load study history")
    return history_service.filter_history(records, record_type, difficulty, language, search)


@router.post("/history", response_model=StudyHistoryRecord)
async def save_history(record: StudyHistoryRecord, user_id: str = Depends(verify_supabase_token)):
    record = record.model_copy(update={"user_id": user_id, "id": None})
    try:
        return await asyncio.to_thread(history_service.save_study_history, record)
    except Exception as e:
        print(f"Error saving study history: {e}")
        raise HTTPException(status_code=500, detail="Failed to save study history")


@router.delete("/history/{record_id}")
async def delete_history(record_id: str, user_id: str = Depends(verify_supabase_token)):
    try:
        deleted = await asyncio.to_thread(history_service.delete_study_history, record_id, user_id)
    except Exception as e:
        print(f"Error deleting study history: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete record")
    if not deleted:
        raise HTTPException(status_code=404, detail="Record not found")
    return {"success": True, "message": "Record deleted successfully"}


@router.get("/history/{record_id}/download")
async def download_history(record_id: str, user_id: str = Depends(verify_supabase_token)):
    record = await _load_record(record_id, user_id)
    return history_service.download_payload(record)


@router.post("/history/{record_id}/retake", response_model=QuestionResult)
async def retake_quiz(record_id: str, user_id: str = Depends(verify_supabase_token)):
    """Generates a fresh quiz from the analysis stored with a history record."""
    record = await _load_record(record_id, user_id)
    if not record.analysis_data:
        raise HTTPException(status_code=400, detail="Cannot retake quiz: Original analysis data not found")

    try:
        return await quiz_service.generate_questions([record.analysis_data], record.difficulty, record.language)
    except Exception as e:
        print(f"Error generating retake quiz: {e}")
        raise to_http_exception(e)
