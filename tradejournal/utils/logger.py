# tradejournal/utils/logger.py
import logging
from pathlib import Path

from tradejournal.config import settings

# Create logs directory if it doesn't exist
LOGS_DIR = Path(settings.LOG_DIR)
LOGS_DIR.mkdir(exist_ok=True)

LOG_FILE = LOGS_DIR / "trade_journal.log"

formatter = logging.Formatter(
    "%(asctime)s [%(levelname)s]: %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
)

file_handler = logging.FileHandler(LOG_FILE)
file_handler.setFormatter(formatter)

stream_handler = logging.StreamHandler()
stream_handler.setFormatter(formatter)

logger = logging.getLogger("trade_journal")
logger.setLevel(logging.INFO)
if not logger.handlers:
    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)
