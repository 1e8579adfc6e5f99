import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).parent
# Shell vars win over the project .env so CI and one-off runs can override it.
load_dotenv(BASE_DIR / ".env", override=False)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _list_env(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]

# ── Google ────────────────────────────────────────────────
GOOGLE_CREDENTIALS_FILE = os.getenv("GOOGLE_CREDENTIALS_FILE", "credentials.json")
GOOGLE_TOKEN_FILE       = os.getenv("GOOGLE_TOKEN_FILE", "token.json")
GOOGLE_SCOPES = _list_env(
    "GOOGLE_SCOPES",
    [
        "https://www.googleapis.com/auth/classroom.courses.readonly",
        "https://www.googleapis.com/auth/classroom.coursework.me.readonly",
        "https://www.googleapis.com/auth/drive.readonly",
        "https://www.googleapis.com/auth/documents.readonly",
    ],
)
COURSE_STATES = _list_env("CLASSROOM_COURSE_STATES", ["ACTIVE"])

# ── Pipeline ──────────────────────────────────────────────
MAX_CONCURRENT_BATCHES = max(1, _int_env("MAX_CONCURRENT_BATCHES", 4))
DRIVE_LIST_LIMIT       = _int_env("DRIVE_LIST_LIMIT", 1000)

# ── Ollama ────────────────────────────────────────────────
OLLAMA_MODEL = os.getenv("OLLAMA_MODEL", "gpt-oss:20b")
OLLAMA_KEEP_ALIVE = os.getenv("OLLAMA_KEEP_ALIVE", "30m")
OLLAMA_NUM_PREDICT = _int_env("OLLAMA_NUM_PREDICT", 512)
OLLAMA_NUM_CTX = _int_env("OLLAMA_NUM_CTX", 8192)
OLLAMA_TEMPERATURE = _float_env("OLLAMA_TEMPERATURE", 0.2)
OLLAMA_TOP_P = _float_env("OLLAMA_TOP_P", 0.9)
AI_TIMEOUT_SEC = _int_env("AI_TIMEOUT_SEC", 120)
AI_MAX_CONTENT_CHARS = _int_env("AI_MAX_CONTENT_CHARS", 12000)

# ── App ───────────────────────────────────────────────────
LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").strip().upper() or "INFO"
