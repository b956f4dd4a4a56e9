import os
import logging
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables only for local development
if os.path.exists(".env"):
    load_dotenv()
    logger.info("Loading from .env file (local development)")

# ------------------------------------------------------------------------------
# STORAGE
# ------------------------------------------------------------------------------

DEFAULT_DATA_FILE = os.path.join("data", "strings.json")
DATA_FILE = os.getenv("STRINGS_DATA_FILE", DEFAULT_DATA_FILE)

# ------------------------------------------------------------------------------
# SERVER
# ------------------------------------------------------------------------------

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
PORT = int(os.getenv("PORT", 8000))

APP_TITLE = "String Analyzer Service"
APP_DESCRIPTION = "Analyze strings, store their properties and query them"
