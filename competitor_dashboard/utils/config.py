import os
import tempfile
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Project-local data folder first; the OS temp area is used on read-only deployments.
DATA_DIR = Path(os.getenv("DATA_DIR", str(Path.cwd() / ".data")))
FALLBACK_DATA_DIR = Path(os.getenv("FALLBACK_DATA_DIR", str(Path(tempfile.gettempdir()) / "research-app-data")))

_VERCEL_URL = os.getenv("VERCEL_URL", "")
APP_URL = (f"https://{_VERCEL_URL}" if _VERCEL_URL else os.getenv("APP_URL", "http://localhost:3000")).rstrip("/")

CONTENT_WEBHOOK_URL = os.getenv("CONTENT_WEBHOOK_URL", "")
CONTENT_WEBHOOK_TIMEOUT = float(os.getenv("CONTENT_WEBHOOK_TIMEOUT", "20"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if o.strip()]
