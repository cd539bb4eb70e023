import os
from dotenv import load_dotenv

load_dotenv()

# --- Gemini ---
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL_NAME = os.getenv("GEMINI_MODEL_NAME", "gemini-1.5-flash-latest")
GEMINI_API_BASE = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_TIMEOUT = float(os.getenv("GEMINI_TIMEOUT", "60"))

# Retry/backoff for every generateContent call
GEMINI_MAX_RETRIES = int(os.getenv("GEMINI_MAX_RETRIES", "3"))
GEMINI_INITIAL_DELAY = float(os.getenv("GEMINI_INITIAL_DELAY", "1.0"))

# --- Page batching ---
PAGE_BATCH_SIZE = int(os.getenv("PAGE_BATCH_SIZE", "5"))
PAGE_MIN_LENGTH = int(os.getenv("PAGE_MIN_LENGTH", "50"))
PAGE_DELAY = float(os.getenv("PAGE_DELAY", "0.5"))  # seconds between page calls

# --- Supabase (study history) ---
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")
HISTORY_TABLE = os.getenv("HISTORY_TABLE", "study_history")

# --- Frontend ---
FRONTEND_ORIGINS = [
    origin.strip()
    for origin in os.getenv("FRONTEND_ORIGINS", "http://localhost:5173,http://localhost:5174").split(",")
    if origin.strip()
]

if not GEMINI_API_KEY:
    print("\nWARNING: GEMINI_API_KEY environment variable not set. Analysis requests will fail.\n")
if not SUPABASE_URL or not SUPABASE_KEY:
    print("\nWARNING: SUPABASE_URL / SUPABASE_KEY not set. Study history is disabled.\n")
