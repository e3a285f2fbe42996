import pytest
from pathlib import Path
from Modules import firefoxprofile
from Modules.errors import FormatError, NotFoundError, ProfileError
from Modules.firefoxprofile import (find_default_profile, find_firefox_cookies, find_firefox_profiles_dir,
                                    read_cookie_database, session_cookies)
from sqlite_builder import cookie_database, cookie_row

PROFILES_INI = """[Install4F96D1932A9F858E]
Default=abcd1234.default-release
Locked=1

[Profile1]
Name=default
IsRelative=1
Path=efgh5678.default

[Profile0]
Name=default-release
IsRelative=1
Path=abcd1234.default-release
Default=1

[General]
StartWithLastProfile=1
Version=2
"""


@pytest.fixture
def firefox_dir(tmp_path):
    (tmp_path / "profiles.ini").write_text(PROFILES_INI, encoding="utf-8")
    profile = tmp_path / "abcd1234.default-release"
    profile.mkdir()
    (profile / "cookies.sqlite").write_bytes(cookie_database([
        cookie_row(1, ".claude.ai", "sessionKey", "sk-ant-sid01-abc"),
        cookie_row(2, ".claude.ai", "lastActiveOrg", "org-uuid"),
        cookie_row(3, ".github.com", "user_session", "gh"),
    ]))
    return tmp_path


def test_default_profile_is_selected(firefox_dir):
    assert find_default_profile(firefox_dir) == firefox_dir / "abcd1234.default-release"


def test_first_profile_when_none_is_default(tmp_path):
    (tmp_path / "profiles.ini").write_text("[Profile0]\nPath=/opt/ff/p0\n\n[Profile1]\nPath=/opt/ff/p1\n",
                                           encoding="utf-8")
    assert find_default_profile(tmp_path) == Path("/opt/ff/p0")


def test_missing_profiles_ini(tmp_path):
    with pytest.raises(ProfileError):
        find_default_profile(tmp_path)


def test_no_profiles(tmp_path):
    (tmp_path / "profiles.ini").write_text("[General]\nVersion=2\n", encoding="utf-8")
    with pytest.raises(ProfileError):
        find_default_profile(tmp_path)


def test_empty_profile_path(tmp_path):
    (tmp_path / "profiles.ini").write_text("[Profile0]\nName=x\nDefault=1\n", encoding="utf-8")
    with pytest.raises(ProfileError):
        find_default_profile(tmp_path)


def test_profiles_dir_on_linux(tmp_path, monkeypatch):
    monkeypatch.setattr(firefoxprofile.sys, "platform", "linux")
    monkeypatch.setattr(firefoxprofile.Path, "home", classmethod(lambda cls: tmp_path))
    with pytest.raises(ProfileError):
        find_firefox_profiles_dir()

    snap_dir = tmp_path / "snap" / "firefox" / "common" / ".mozilla" / "firefox"
    snap_dir.mkdir(parents=True)
    assert find_firefox_profiles_dir() == snap_dir

    (tmp_path / ".mozilla" / "firefox").mkdir(parents=True)
    assert find_firefox_profiles_dir() == tmp_path / ".mozilla" / "firefox"


def test_profiles_dir_on_windows_needs_appdata(tmp_path, monkeypatch):
    monkeypatch.setattr(firefoxprofile.sys, "platform", "win32")
    monkeypatch.delenv("APPDATA", raising=False)
    with pytest.raises(ProfileError):
        find_firefox_profiles_dir()

    (tmp_path / "Mozilla" / "Firefox").mkdir(parents=True)
    monkeypatch.setenv("APPDATA", str(tmp_path))
    assert find_firefox_profiles_dir() == tmp_path / "Mozilla" / "Firefox"


def test_read_cookie_database_copies_file(firefox_dir):
    db_path = firefox_dir / "abcd1234.default-release" / "cookies.sqlite"
    assert read_cookie_database(db_path) == db_path.read_bytes()


def test_read_cookie_database_size_limit(firefox_dir):
    db_path = firefox_dir / "abcd1234.default-release" / "cookies.sqlite"
    with pytest.raises(FormatError):
        read_cookie_database(db_path, max_size=1024)


def test_read_cookie_database_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_cookie_database(tmp_path / "cookies.sqlite")


def test_find_firefox_cookies(firefox_dir):
    assert find_firefox_cookies("claude.ai", profiles_dir=firefox_dir) == ("sk-ant-sid01-abc", "org-uuid", "")


def test_session_cookies_require_session_key_and_org():
    assert session_cookies({"sessionKey": "s", "lastActiveOrg": "o", "cf_clearance": "c"}, "claude.ai") == \
        ("s", "o", "c")
    with pytest.raises(NotFoundError):
        session_cookies({"lastActiveOrg": "o"}, "claude.ai")
    with pytest.raises(NotFoundError):
        session_cookies({"sessionKey": "s"}, "claude.ai")
