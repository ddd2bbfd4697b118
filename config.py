from __future__ import annotations

import os


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "")
    try:
        return int(raw) if raw.strip() else default
    except ValueError:
        return default


# Slider bounds for the practice range
QUIZ_MIN_BOUND = _int_env("QUIZ_MIN_BOUND", 1)
QUIZ_MAX_BOUND = _int_env("QUIZ_MAX_BOUND", 12)
if QUIZ_MIN_BOUND > QUIZ_MAX_BOUND:
    QUIZ_MIN_BOUND, QUIZ_MAX_BOUND = QUIZ_MAX_BOUND, QUIZ_MIN_BOUND

# Oldest sessions are evicted past this many
QUIZ_MAX_SESSIONS = max(1, _int_env("QUIZ_MAX_SESSIONS", 1000))

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv(
        "QUIZ_CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    ).split(",")
    if o.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
