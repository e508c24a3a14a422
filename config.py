# Paths, environment and persisted app settings.
import json
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent
load_dotenv(BASE_DIR / ".env")

logger = logging.getLogger(__name__)

DB_PATH = Path(os.environ.get("JOURNAL_DB_PATH") or BASE_DIR / "journal.db")
SETTINGS_PATH = Path(os.environ.get("JOURNAL_SETTINGS_PATH") or BASE_DIR / ".journal_settings.json")
LOG_LEVEL = (os.environ.get("JOURNAL_LOG_LEVEL") or "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ENTRIES_PER_PAGE = 3


def _settings() -> dict:
    if not SETTINGS_PATH.exists():
        return {}
    try:
        data = json.loads(SETTINGS_PATH.read_text())
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", SETTINGS_PATH, e)
        return {}
    return data if isinstance(data, dict) else {}


def _save_settings(data: dict) -> None:
    SETTINGS_PATH.write_text(json.dumps(data, indent=2))


def get_use_all_entries_if_demo_data_present() -> bool:
    return bool(_settings().get("useAllEntriesIfDemoDataPresent", False))


def set_use_all_entries_if_demo_data_present(value: bool) -> None:
    s = _settings()
    s["useAllEntriesIfDemoDataPresent"] = bool(value)
    _save_settings(s)
    logger.info("Demo-data reflection bypass set to %s", bool(value))


def clear_settings() -> None:
    if SETTINGS_PATH.exists():
        SETTINGS_PATH.unlink()
