import logging
from Modules.btree_traversal import traverse_table_btree

logger = logging.getLogger(__name__)

# The schema table is always rooted on page 1
SCHEMA_ROOT_PAGE = 1
# sqlite_master columns: type(0), name(1), tbl_name(2), rootpage(3), sql(4)
TYPE_COLUMN = 0
NAME_COLUMN = 1
ROOTPAGE_COLUMN = 3


def list_tables(image):
    """
    Finds the root page for the tables in the sqlite_master table.
    """
    root_pages = []

    def collect(row):
        if len(row) <= ROOTPAGE_COLUMN:
            return
        if row[TYPE_COLUMN].text(image.text_encoding) != "table" or not row[ROOTPAGE_COLUMN].is_int:
            return
        root_pages.append({
            "name": row[NAME_COLUMN].text(image.text_encoding),
            "root_page": row[ROOTPAGE_COLUMN].value,
        })

    traverse_table_btree(image, SCHEMA_ROOT_PAGE, collect)
    return root_pages


def find_table_root(image, table_name):
    """
    Returns the root page of the named table, or 0 if the schema has no such table.
    """
    root_page = 0
    for table in list_tables(image):
        if table["name"] == table_name:
            root_page = table["root_page"]
    logger.debug(f"Root page for {table_name}: {root_page}")
    return root_page
