import os
import sys
import shutil
import logging
import tempfile
import configparser
from pathlib import Path
from Modules.cookieextract import parse_cookies_from_sqlite, COOKIE_TABLE
from Modules.errors import FormatError, NotFoundError, ProfileError

logger = logging.getLogger(__name__)

COOKIE_DATABASE = "cookies.sqlite"
# Work and recursion depth grow with file size, so oversized files are refused
MAX_DATABASE_SIZE = 64 * 1024 * 1024

SESSION_COOKIE = "sessionKey"
ORG_COOKIE = "lastActiveOrg"
CLEARANCE_COOKIE = "cf_clearance"


def firefox_base_dirs():
    """Candidate Firefox directories (holding profiles.ini) for the current platform."""
    home = Path.home()

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if not appdata:
            raise ProfileError("APPDATA environment variable not set")
        return [Path(appdata) / "Mozilla" / "Firefox"]
    elif sys.platform == "darwin":
        return [home / "Library" / "Application Support" / "Firefox"]
    else:  # Linux
        return [
            home / ".mozilla" / "firefox",
            home / "snap" / "firefox" / "common" / ".mozilla" / "firefox",
        ]


def find_firefox_profiles_dir():
    for candidate in firefox_base_dirs():
        if candidate.is_dir():
            return candidate
    raise ProfileError(f"Firefox directory not found: {firefox_base_dirs()[0]}")


def find_default_profile(firefox_dir):
    """
    Parses profiles.ini and returns the default profile directory.
    Falls back to the first profile if no profile has Default=1.
    """
    firefox_dir = Path(firefox_dir)
    ini_path = firefox_dir / "profiles.ini"

    parser = configparser.ConfigParser(interpolation=None, strict=False)
    try:
        with open(ini_path, "r", encoding="utf-8") as ini_file:
            parser.read_file(ini_file)
    except OSError as e:
        raise ProfileError(f"Opening profiles.ini: {e}") from e
    except configparser.Error as e:
        raise ProfileError(f"Parsing profiles.ini: {e}") from e

    profiles = [parser[section] for section in parser.sections() if section.startswith("Profile")]
    if not profiles:
        raise ProfileError("No profiles found in profiles.ini")

    selected = next((profile for profile in profiles if profile.get("Default") == "1"), profiles[0])

    profile_path = selected.get("Path", "").strip()
    if not profile_path:
        raise ProfileError("Empty profile path in profiles.ini")
    if selected.get("IsRelative") == "1":
        return firefox_dir / Path(profile_path)
    return Path(profile_path)


def read_cookie_database(db_path, max_size=MAX_DATABASE_SIZE):
    """
    Copies the cookie database aside, since Firefox holds a lock on the live
    file, and returns the bytes of the copy.
    """
    db_path = Path(db_path)
    size = db_path.stat().st_size
    if size > max_size:
        raise FormatError(f"{db_path.name} is {size} bytes, larger than the {max_size} byte limit")

    with tempfile.TemporaryDirectory(prefix="foxbite_") as temp_dir:
        temp_path = Path(temp_dir) / db_path.name
        shutil.copy2(db_path, temp_path)
        logger.debug(f"Copied {db_path} to {temp_path}")
        return temp_path.read_bytes()


def read_profile_cookies(db_path, domain, table_name=COOKIE_TABLE):
    data = read_cookie_database(db_path)
    return parse_cookies_from_sqlite(data, domain, table_name)


def session_cookies(cookies, domain):
    """
    Picks (session_key, org_id, cf_clearance) out of the extracted cookies.
    cf_clearance may be empty.
    """
    session_key = cookies.get(SESSION_COOKIE, "")
    org_id = cookies.get(ORG_COOKIE, "")
    cf_clearance = cookies.get(CLEARANCE_COOKIE, "")

    if not session_key:
        raise NotFoundError(f"{SESSION_COOKIE} not found, are you logged in to {domain} in Firefox?")
    if not org_id:
        raise NotFoundError(f"{ORG_COOKIE} not found in Firefox cookies")
    return session_key, org_id, cf_clearance


def find_default_cookie_database(profiles_dir=None):
    firefox_dir = Path(profiles_dir) if profiles_dir else find_firefox_profiles_dir()
    profile_dir = find_default_profile(firefox_dir)
    logger.info(f"Firefox profile: {profile_dir}")
    return profile_dir / COOKIE_DATABASE


def find_firefox_cookies(domain="claude.ai", profiles_dir=None):
    """
    Reads the session cookies for domain from the default Firefox profile.
    """
    cookies = read_profile_cookies(find_default_cookie_database(profiles_dir), domain)
    session_key, org_id, cf_clearance = session_cookies(cookies, domain)
    logger.info(f"Firefox cookies found: org_id={org_id[:8]}...")
    return session_key, org_id, cf_clearance
