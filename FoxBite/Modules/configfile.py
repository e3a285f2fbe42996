import json
import logging
from pathlib import Path
from Modules.errors import ConfigError

logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "PASTE"
CONFIG_KEYS = ("session_key", "org_id", "cf_clearance")

README_TEXT = """=== Claude Monitor - Setup ===

To get the values for config.json:

1. Open https://claude.ai in Firefox and log in

2. Press F12 (DevTools) -> tab "Storage" -> Cookies -> https://claude.ai

3. Find and copy these 3 cookies:
   - sessionKey      (starts with sk-ant-sid01-...)
   - lastActiveOrg   (UUID format)
   - cf_clearance    (Cloudflare token)

4. Paste all three values into config.json

Or run foxbite with -c to import them from Firefox automatically.

Note: cf_clearance refreshes frequently (hours/days).
sessionKey refreshes roughly once a month.
"""


def load_config(path):
    """
    Loads config.json and checks that the session key and org id are filled in.
    """
    try:
        with open(path, "r", encoding="utf-8") as config_file:
            raw = json.load(config_file)
    except OSError as e:
        raise ConfigError(f"Reading config file: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Parsing config: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError("Parsing config: expected a JSON object")

    config = {key: str(raw.get(key) or "").strip() for key in CONFIG_KEYS}

    for key in ("session_key", "org_id"):
        if not config[key] or config[key].startswith(PLACEHOLDER_PREFIX):
            raise ConfigError(f"{key} not configured")
    return config


def save_firefox_config(path, session_key, org_id, cf_clearance=""):
    """
    Writes (or updates) config.json with cookies read from Firefox.
    An empty cf_clearance keeps the value already in the file.
    """
    path = Path(path)
    if not cf_clearance and path.exists():
        try:
            existing = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(existing, dict):
                cf_clearance = existing.get("cf_clearance") or ""
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read existing cf_clearance from {path}: {e}")

    config = {
        "session_key": session_key,
        "org_id": org_id,
        "cf_clearance": cf_clearance,
    }
    _write_json(path, config)
    logger.info(f"Config saved to {path}")


def create_template_config(path):
    """
    Writes a placeholder config.json with a README-config.txt beside it.
    """
    path = Path(path)
    config = {
        "session_key": "PASTE_sessionKey_HERE",
        "org_id": "PASTE_lastActiveOrg_HERE",
        "cf_clearance": "PASTE_cf_clearance_HERE",
    }
    _write_json(path, config)
    (path.parent / "README-config.txt").write_text(README_TEXT, encoding="utf-8")
    logger.info(f"Template config created at {path}")


def _write_json(path, config):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config, indent=2), encoding="utf-8")
