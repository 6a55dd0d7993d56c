"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Values are read once at import; the rest of the app treats them as
immutable and stays decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Google Custom Search (from env). Both are required; either missing disables /api/search.
GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "").strip()
GOOGLE_CSE_ID: str = os.getenv("GOOGLE_CSE_ID", "").strip()
GOOGLE_SEARCH_URL: str = "https://www.googleapis.com/customsearch/v1"

# Narration: number of leading results read back to the user
SUMMARY_HIGHLIGHTS: int = 3

# Agent client: where the gateway lives (UI -> backend)
API_BASE: str = os.getenv("API_BASE", "http://localhost:8000").strip() or "http://localhost:8000"

# Agent client -> gateway request timeout (seconds)
CLIENT_HTTP_TIMEOUT: float = 30.0

# Speech (recognition and synthesis share the language)
SPEECH_LANG: str = "en-US"
SPEECH_RATE: float = 1.0
SPEECH_PITCH: float = 1.0

# How long the client stays in "responding" after narration starts (seconds)
RESPONDING_DELAY_SECONDS: float = 0.6
