import logging
from Modules.btree_traversal import traverse_table_btree
from Modules.errors import NotFoundError
from Modules.findtable import find_table_root
from Modules.parsesqliteheader import load_file_image

logger = logging.getLogger(__name__)

COOKIE_TABLE = "moz_cookies"
# moz_cookies columns: id(0), baseDomain(1), originAttributes(2), name(3), value(4), host(5), ...
NAME_COLUMN = 3
VALUE_COLUMN = 4
HOST_COLUMN = 5


def extract_cookies(image, domain, table_name=COOKIE_TABLE):
    """
    Walks the cookie table and returns {name: value} for every row whose host
    contains domain. Duplicate names keep the last value seen.
    """
    root_page = find_table_root(image, table_name)
    if root_page == 0:
        raise NotFoundError(f"{table_name} table not found (not a Firefox cookies database?)")

    encoding = image.text_encoding
    cookies = {}

    def collect(row):
        if len(row) <= HOST_COLUMN:
            return
        if domain not in row[HOST_COLUMN].text(encoding):
            return
        name = row[NAME_COLUMN].text(encoding)
        value = row[VALUE_COLUMN].text(encoding)
        if name and value:
            cookies[name] = value

    rows = traverse_table_btree(image, root_page, collect)
    logger.info(f"Found {len(cookies)} {domain} cookies in {rows} {table_name} rows")
    return cookies


def parse_cookies_from_sqlite(data, domain, table_name=COOKIE_TABLE):
    """
    Reads the cookies for domain from the raw bytes of a cookies.sqlite file.
    """
    image = load_file_image(data)
    return extract_cookies(image, domain, table_name)
