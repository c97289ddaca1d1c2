"""
Paths, logging setup, config load/save, safe_print.
"""

import os
import json
import sys
import logging
from pathlib import Path


# ─── Paths ───────────────────────────────────────────────────────
# One config + log per user per machine.
_FOLDER_NAME = "Wakapi"

if sys.platform == "win32":
    BASE_DIR = Path(os.environ.get("PROGRAMDATA", "C:\\ProgramData")) / _FOLDER_NAME
else:
    BASE_DIR = Path(os.environ.get("WAKAPI_HOME", Path.home() / ".wakapi"))

CONFIG_FILE = BASE_DIR / "config.json"
LOG_FILE = BASE_DIR / "wakapi.log"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


# ─── Safe print (no crash when there is no console) ──────────────

def safe_print(*args, **kwargs):
    try:
        print(*args, **kwargs)
    except Exception:
        pass


# ─── Logging ─────────────────────────────────────────────────────

log = logging.getLogger("wakapi")


def setup_logging(log_file=LOG_FILE, level=logging.INFO):
    """File + console logging. Truncates the log file once it passes 1 MB."""
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    try:
        if log_file.exists() and log_file.stat().st_size > 1_000_000:
            log_file.write_text("")
    except OSError:
        pass

    log.setLevel(level)
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    log.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    log.addHandler(console_handler)
    return log


# ─── Config Management ──────────────────────────────────────────

def load_config(path=CONFIG_FILE):
    """Load config from disk. Returns dict or None."""
    path = Path(path)
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError):
            return None
        return data if isinstance(data, dict) else None
    return None


def save_config(config, path=CONFIG_FILE):
    """Save config dict to disk."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)
    log.info("Config saved to %s", path)
