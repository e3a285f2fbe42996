import logging
import pytest
from Modules.errors import FormatError
from Modules.parsesqliteheader import parse_sqlite_header, load_file_image, get_page
from Modules.cookieextract import parse_cookies_from_sqlite
from sqlite_builder import build_database, cookie_row, leaf_page, schema_row


@pytest.fixture
def database():
    pages = [leaf_page([["x"]], 1024, first_page=True), leaf_page([["y"]], 1024), leaf_page([["z"]], 1024)]
    return build_database(pages, page_size=1024)


def test_parse_header(database):
    header = parse_sqlite_header(database)
    assert header["page_size"] == 1024
    assert header["text_encoding"] == "utf-8"
    assert header["database_size"] == 3
    assert header["sqlite_version"] == 3046000


def test_page_size_sentinel(database):
    data = bytearray(database)
    data[16:18] = b"\x00\x01"
    assert parse_sqlite_header(data)["page_size"] == 65536


def test_bad_magic():
    with pytest.raises(FormatError):
        parse_sqlite_header(b"SQLite format 2\x00" + bytes(84))


def test_truncated_header(database):
    with pytest.raises(FormatError):
        parse_sqlite_header(database[:99])


def test_page_size_must_be_power_of_two(database):
    data = bytearray(database)
    data[16:18] = (1000).to_bytes(2, "big")
    with pytest.raises(FormatError):
        load_file_image(data)
    data[16:18] = (64).to_bytes(2, "big")
    with pytest.raises(ValueError):
        load_file_image(data)
    data[16:18] = (0).to_bytes(2, "big")
    with pytest.raises(FormatError):
        load_file_image(data)


def test_text_encoding():
    data = build_database([leaf_page([], 512, first_page=True)], page_size=512, text_encoding=2)
    assert load_file_image(data).text_encoding == "utf-16-le"


def test_get_page(database):
    image = load_file_image(database)
    assert bytes(get_page(image, 2)) == database[1024:2048]
    assert bytes(get_page(image, 1)[:16]) == b"SQLite format 3\x00"
    assert get_page(image, 0) is None
    assert get_page(image, 4) is None


def test_get_page_rejects_partial_page(database):
    image = load_file_image(database[:2500])
    assert get_page(image, 2) is not None
    assert get_page(image, 3) is None


def test_small_page_size_is_accepted():
    pages = [
        leaf_page([schema_row("moz_cookies", 2)], 256, first_page=True),
        leaf_page([[1, "claude.ai", "", "sessionKey", "sk", "claude.ai"]], 256),
    ]
    data = build_database(pages, page_size=256)
    assert load_file_image(data).page_size == 256
    assert parse_cookies_from_sqlite(data, "claude.ai") == {"sessionKey": "sk"}


def test_unknown_text_encoding_reads_as_utf8(caplog):
    pages = [
        leaf_page([schema_row("moz_cookies", 2)], 4096, first_page=True),
        leaf_page([cookie_row(1, "claude.ai", "sessionKey", "sk")], 4096),
    ]
    data = build_database(pages, page_size=4096, text_encoding=7)
    with caplog.at_level(logging.WARNING):
        assert parse_sqlite_header(data)["text_encoding"] == "utf-8"
    assert "Unknown text encoding 7" in caplog.text
    assert parse_cookies_from_sqlite(data, "claude.ai") == {"sessionKey": "sk"}
