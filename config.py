"""
Configuration for the Research API plugin.
Values come from the environment so the same nodes work against any deployment.
"""
import os

# --- RESEARCH API ---
DEFAULT_BASE_URL = "http://localhost:4030"
BASE_URL = os.getenv("RESEARCH_API_BASE_URL", DEFAULT_BASE_URL)

SEARCH_PATH = "/www/search"
SCRAPE_PATH = "/www/scrape"

REQUEST_TIMEOUT = float(os.getenv("RESEARCH_API_TIMEOUT", "30"))

USER_AGENT = "research-api-plugin/1.0 (+https://github.com/hushaudio)"

# --- LOGGING ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("RESEARCH_API_LOG_FILE") or None
