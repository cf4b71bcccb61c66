import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CREDENTIAL_KEY = os.getenv("CREDENTIAL_KEY", "gemini_api_key")

GEMINI_API_BASE = os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash-preview-09-2025")

MAX_ATTEMPTS = int(os.getenv("MAX_ATTEMPTS", "5"))
BACKOFF_BASE_SECONDS = float(os.getenv("BACKOFF_BASE_SECONDS", "1.0"))
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "60"))

TITLE_TEMPERATURE = float(os.getenv("TITLE_TEMPERATURE", "0.9"))
OUTPUT_LANGUAGE = os.getenv("OUTPUT_LANGUAGE", "Korean")
TITLES_PER_CATEGORY = int(os.getenv("TITLES_PER_CATEGORY", "20"))
RECOMMENDATION_COUNT = int(os.getenv("RECOMMENDATION_COUNT", "5"))
STRICT_RESULT_COUNTS = os.getenv("STRICT_RESULT_COUNTS", "false").lower() in ("1", "true", "yes")


def generate_content_url(model: str = GEMINI_MODEL) -> str:
    return f"{GEMINI_API_BASE}/models/{model}:generateContent"
