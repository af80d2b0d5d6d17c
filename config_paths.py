import json
import logging
import os

from completion_popup import RESERVED_WORDS

logger = logging.getLogger(__name__)

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "gridpeek")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "gridpeek.log")
LOG_LEVEL_ENV = "GRIDPEEK_LOG_LEVEL"

# default settings
PAGE_SIZE_DEFAULT = 200
LOG_LEVEL_DEFAULT = "WARNING"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def load_config():
    cfg = {
        "KEY_CONFIG": {},
        "PAGE_SIZE": PAGE_SIZE_DEFAULT,
        "RESERVED_WORDS": list(RESERVED_WORDS),
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_JSON, exc)
        return cfg
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: top level is not an object", CONFIG_JSON)
        return cfg

    keys = data.get("key_config")
    if isinstance(keys, dict):
        cfg["KEY_CONFIG"] = {
            name: spec
            for name, spec in keys.items()
            if isinstance(name, str) and isinstance(spec, str)
        }

    page_size = data.get("page_size")
    if isinstance(page_size, int) and not isinstance(page_size, bool) and page_size > 0:
        cfg["PAGE_SIZE"] = page_size

    words = data.get("reserved_words")
    if isinstance(words, list) and all(isinstance(w, str) for w in words):
        cfg["RESERVED_WORDS"] = [w for w in words if w]

    level = data.get("log_level")
    if isinstance(level, str) and level.strip():
        cfg["LOG_LEVEL"] = level.strip().upper()

    return cfg


def configure_logging(level=None):
    """Send log records to the log file; a curses screen has no room for them."""
    level = os.environ.get(LOG_LEVEL_ENV) or level or LOG_LEVEL_DEFAULT
    numeric = logging.getLevelName(str(level).upper())
    if not isinstance(numeric, int):
        numeric = logging.WARNING
    ensure_config_dirs()
    logging.basicConfig(filename=LOG_PATH, level=numeric, format=LOG_FORMAT)
    return numeric
