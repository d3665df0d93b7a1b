"""Application configuration and constants."""
import logging
import os
from pathlib import Path

# Directory paths
BASE_DIR = Path(__file__).resolve().parent.parent

# Identity headers forwarded by the authenticating proxy.
# The email header is only present for verified addresses.
USER_ID_HEADER = os.environ.get("PHOTOGRAPH_USER_HEADER", "X-User-Id")
VERIFIED_EMAIL_HEADER = os.environ.get("PHOTOGRAPH_EMAIL_HEADER", "X-User-Email")

# Paths that don't require an identity
PUBLIC_PATHS = {"/health", "/docs", "/openapi.json"}

# Bind address when run with `python -m photograph.main`
HOST = os.environ.get("PHOTOGRAPH_HOST", "127.0.0.1")
PORT = int(os.environ.get("PHOTOGRAPH_PORT", "8000"))

# SQLite busy timeout in seconds
DB_TIMEOUT = float(os.environ.get("PHOTOGRAPH_DB_TIMEOUT", "5"))

# Field limits
GALLERY_NAME_MAX_LENGTH = 256
GALLERY_DESCRIPTION_MAX_LENGTH = 265
IMAGE_NAME_MAX_LENGTH = 256

# Logging
LOG_LEVEL = os.environ.get("PHOTOGRAPH_LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s | %(levelname)s | %(message)s")
logger = logging.getLogger("photograph")
