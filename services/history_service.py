from datetime import datetime, timezone

from supabase import Client, create_client

import config
from services.schemas import StudyHistoryRecord

_supabase: Client | None = None


class HistoryUnavailableError(RuntimeError):
    """Supabase is not configured."""


def get_supabase() -> Client:
    """Lazily creates the shared Supabase client."""
    global _supabase
    if _supabase is None:
        if not config.SUPABASE_URL or not config.SUPABASE_KEY:
            raise HistoryUnavailableError("Supabase URL and Key must be set in the environment variables.")
        _supabase = create_client(config.SUPABASE_URL, config.SUPABASE_KEY)
    return _supabase


def _to_row(record: StudyHistoryRecord) -> dict:
    return record.model_dump(mode="json", exclude_none=True)


def save_study_history(record: StudyHistoryRecord) -> StudyHistoryRecord:
    if record.timestamp is None:
        record = record.model_copy(update={"timestamp": datetime.now(timezone.utc)})
    response = get_supabase().table(config.HISTORY_TABLE).insert(_to_row(record)).execute()
    print(f"[history] Saved {record.type} record for user {str(record.user_id)[:10]}...")
    return StudyHistoryRecord.model_validate(response.data[0]) if response.data else record


def get_study_history(user_id: str) -> list[StudyHistoryRecord]:
    """All of a user's records, newest first."""
    response = (
        get_supabase()
        .table(config.HISTORY_TABLE)
        .select("*")
        .eq("user_id", user_id)
        .order("timestamp", desc=True)
        .execute()
    )
    return [StudyHistoryRecord.model_validate(row) for row in response.data or []]


def get_study_record(record_id: str, user_id: str) -> StudyHistoryRecord | None:
    response = (
        get_supabase()
        .table(config.HISTORY_TABLE)
        .select("*")
        .eq("id", record_id)
        .eq("user_id", user_id)
        .limit(1)
        .execute()
    )
    if not response.data:
        return None
    return StudyHistoryRecord.model_validate(response.data[0])


def delete_study_history(record_id: str, user_id: str) -> bool:
    """Deletes one of the user's records. Returns False when nothing matched."""
    response = (
        get_supabase()
        .table(config.HISTORY_TABLE)
        .delete()
        .eq("id", record_id)
        .eq("user_id", user_id)
        .execute()
    )
    deleted = bool(response.data)
    print(f"[history] Delete {record_id} for user {user_id[:10]}...: {'ok' if deleted else 'not found'}")
    return deleted


def filter_history(
    records: list[StudyHistoryRecord],
    record_type: str = "all",
    difficulty: str = "all",
    language: str = "all",
    search: str = "",
) -> list[StudyHistoryRecord]:
    filtered = list(records)
    if record_type != "all":
        filtered = [r for r in filtered if r.type == record_type]
    if difficulty != "all":
        filtered = [r for r in filtered if r.difficulty == difficulty]
    if language != "all":
        filtered = [r for r in filtered if r.language == language]

    term = search.strip().lower()
    if term:
        filtered = [
            r for r in filtered
            if term in (r.file_name or "").lower() or term in r.type.lower()
        ]
    return filtered


def download_title(record: StudyHistoryRecord) -> str:
    date_string = (record.timestamp or datetime.now(timezone.utc)).strftime("%m/%d/%Y")
    if record.type == "quiz":
        return f"Quiz Results - {date_string}"
    return f"Study Analysis - {date_string}"


def download_payload(record: StudyHistoryRecord) -> dict:
    """Title, export type and content for the frontend's PDF export."""
    if record.type == "quiz":
        content = record.quiz_data or {}
        export_type = "quiz-results"
    else:
        content = [record.analysis_data.model_dump(by_alias=True)] if record.analysis_data else []
        export_type = "analysis"
    return {"title": download_title(record), "type": export_type, "content": content}
