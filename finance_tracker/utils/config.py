"""
Configuration

Settings come from environment variables, optionally loaded from a .env
file in the working directory. Explicit arguments always win.
"""
import os
from pathlib import Path

from dotenv import load_dotenv


# Load environment variables
load_dotenv()

DEFAULT_DATA_DIR = Path.home() / '.finance_tracker'


def get_data_dir() -> Path:
    """Directory for the JSON storage backend (FINANCE_DATA_DIR)"""
    return Path(os.getenv('FINANCE_DATA_DIR', str(DEFAULT_DATA_DIR))).expanduser()


def get_storage_backend() -> str:
    """'json' (default) or 'postgres' (STORAGE_BACKEND)"""
    return os.getenv('STORAGE_BACKEND', 'json').strip().lower()


def get_review_threshold() -> float:
    """Confidence below which a suggestion needs review (REVIEW_THRESHOLD)"""
    try:
        return float(os.getenv('REVIEW_THRESHOLD', '0.80'))
    except ValueError:
        print("⚠️  Invalid REVIEW_THRESHOLD, using 0.80")
        return 0.80
