import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables (only in development)
# In containers, environment variables are set directly
if os.getenv("ENVIRONMENT") != "production":
    load_dotenv()

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Upload directory - originals and "_processed.jpg" derivatives live side by side
UPLOAD_DIR_STR = os.getenv("UPLOAD_DIR", str(BASE_DIR / "uploads"))
UPLOAD_DIR = Path(UPLOAD_DIR_STR)
UPLOAD_DIR.mkdir(parents=True, exist_ok=True)

# Public URL prefix under which UPLOAD_DIR is served
UPLOAD_URL_PREFIX = "/uploads"

# AI providers
AI_PROVIDER = os.getenv("AI_PROVIDER", "gemini")  # Options: 'gemini', 'openrouter', 'anthropic', 'mock'

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")

OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_MODEL = os.getenv("OPENROUTER_MODEL", "google/gemini-flash-1.5")

ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
ANTHROPIC_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-3-haiku-20240307")

# No timeout unless configured: a hung call hangs only its own request
_timeout = os.getenv("AI_REQUEST_TIMEOUT_SECONDS")
AI_REQUEST_TIMEOUT_SECONDS = float(_timeout) if _timeout else None

# Pipeline limits
STRUCTURE_INPUT_LIMIT = 4000  # chars of extracted text sent to the structuring stage
SUMMARY_TEXT_LIMIT = 1000  # chars of allText sent to the summary stage
SUMMARY_ARTICLE_LIMIT = 3  # articles sent to the summary stage
RAW_TEXT_STORE_LIMIT = 5000  # chars of raw extracted text kept on the document
FALLBACK_SUMMARY_CLIP = 150  # chars of article content used as fallback summary

# Database configuration
DATABASE_TYPE = os.getenv("DATABASE_TYPE", "memory")  # Options: 'memory', 'json'
JSON_DB_PATH = os.getenv("JSON_DB_PATH")  # Path to JSON database directory

# CORS
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# Rate Limiting
RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
RATE_LIMIT_PER_MINUTE = int(os.getenv("RATE_LIMIT_PER_MINUTE", "30"))

PORT = int(os.getenv("PORT", "5000"))
