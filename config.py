import os
import secrets

from dotenv import load_dotenv

load_dotenv()

GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "").strip()
if not GEMINI_API_KEY:
    raise RuntimeError("GEMINI_API_KEY environment variable not set")

DESCRIPTION_MODEL = os.environ.get("DESCRIPTION_MODEL", "gemini-2.5-flash")
IMAGE_MODEL = os.environ.get("IMAGE_MODEL", "gemini-2.5-flash-image-preview")
GEMINI_TIMEOUT_MS = int(os.environ.get("GEMINI_TIMEOUT_MS", "300000"))

GOOGLE_CLIENT_ID = os.environ.get(
    "GOOGLE_CLIENT_ID",
    "426419412620-gb3iencb9ntn7j11d58c758og8ui86bo.apps.googleusercontent.com",
)

# Sessions live in memory, so a random key just logs everyone out on restart.
SECRET_KEY = os.environ.get("FLASK_SECRET_KEY") or secrets.token_hex(32)
MAX_SESSIONS = int(os.environ.get("MAX_SESSIONS", "200"))

PORT = int(os.environ.get("PORT", "5001"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
