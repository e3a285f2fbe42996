import struct
import logging
from Modules.errors import MalformedCellError
from Modules.parsesqliteheader import get_page, HEADER_SIZE
from Modules.recorddecode import decode_record
from Modules.varints import single_varint

logger = logging.getLogger(__name__)

# Constants for page types
TABLEINTERIOR_PAGE_TYPE = 5
TABLELEAF_PAGE_TYPE = 13

LEAF_HEADER_SIZE = 8
INTERIOR_HEADER_SIZE = 12
# Bytes a leaf cell may need beyond the inline payload (overflow threshold X = U - 35)
LEAF_RESERVED_BYTES = 35
MAX_TREE_DEPTH = 64


def traverse_table_btree(image, root_page, visit):
    """
    Calls visit(row) for every record in the table B-tree rooted at root_page
    and returns the number of rows visited.

    Interior pages are walked right-most child first, then their cells in
    pointer array order. Each page is visited at most once and branches deeper
    than MAX_TREE_DEPTH are abandoned.
    """
    seen_pages = set()
    return _walk_page(image, root_page, visit, 0, seen_pages)


def _walk_page(image, page_number, visit, depth, seen_pages):
    if page_number == 0:
        return 0
    if depth >= MAX_TREE_DEPTH:
        logger.warning(f"Page {page_number}: B-tree deeper than {MAX_TREE_DEPTH} levels, branch skipped")
        return 0
    if page_number in seen_pages:
        logger.warning(f"Page {page_number}: already visited, branch skipped")
        return 0
    seen_pages.add(page_number)

    page_data = get_page(image, page_number)
    if page_data is None:
        logger.warning(f"Page {page_number}: outside the database file")
        return 0

    # Page 1 carries the 100-byte database header before its page header
    header_offset = HEADER_SIZE if page_number == 1 else 0
    if len(page_data) < header_offset + LEAF_HEADER_SIZE:
        return 0

    page_type = page_data[header_offset]
    num_cells = struct.unpack_from(">H", page_data, header_offset + 3)[0]

    if page_type == TABLELEAF_PAGE_TYPE:
        return parse_leaf_page(image, page_data, page_number, header_offset, num_cells, visit)

    if page_type == TABLEINTERIOR_PAGE_TYPE:
        if len(page_data) < header_offset + INTERIOR_HEADER_SIZE:
            return 0
        visited = 0
        rightmost_page = struct.unpack_from(">I", page_data, header_offset + 8)[0]
        visited += _walk_page(image, rightmost_page, visit, depth + 1, seen_pages)
        for pointer in cell_pointers(page_data, header_offset + INTERIOR_HEADER_SIZE, num_cells):
            if pointer + 4 > len(page_data):
                continue
            child_page_number = struct.unpack_from(">I", page_data, pointer)[0]
            visited += _walk_page(image, child_page_number, visit, depth + 1, seen_pages)
        return visited

    logger.warning(f"Page {page_number}: page type {page_type} is not a table B-tree page, skipped")
    return 0


def parse_leaf_page(image, page_data, page_number, header_offset, num_cells, visit):
    """
    Decodes every cell on a table leaf page and passes each record to visit.
    """
    visited = 0
    for pointer in cell_pointers(page_data, header_offset + LEAF_HEADER_SIZE, num_cells):
        try:
            payload = leaf_cell_payload(image, page_data, pointer)
        except MalformedCellError as e:
            logger.debug(f"Page {page_number}: Error parsing record at page offset {pointer}: {e}")
            continue
        columns = decode_record(payload)
        if columns is None:
            logger.debug(f"Page {page_number}: Invalid record header at page offset {pointer}")
            continue
        visit(columns)
        visited += 1
    return visited


def leaf_cell_payload(image, page_data, cell_offset):
    """
    Returns the inline record payload of a table leaf cell. Overflow pages are not followed.
    """
    payload_length, length = single_varint(page_data, cell_offset)
    if length == 0:
        raise MalformedCellError("Truncated payload length")
    offset = cell_offset + length

    _, length = single_varint(page_data, offset)  # rowid
    if length == 0:
        raise MalformedCellError("Truncated rowid")
    offset += length

    inline_length = min(payload_length, image.page_size - LEAF_RESERVED_BYTES)
    end = min(offset + inline_length, len(page_data))
    if offset >= end:
        raise MalformedCellError("Empty payload")
    return page_data[offset:end]


def cell_pointers(page_data, pointer_start, num_cells):
    """
    Yields the cell pointers of a page, stopping where the array runs off the page.
    Pointers into the page header, the pointer array or past the page end are skipped.
    """
    content_start = pointer_start + num_cells * 2
    for i in range(num_cells):
        pointer_offset = pointer_start + i * 2
        if pointer_offset + 2 > len(page_data):
            break
        pointer = struct.unpack_from(">H", page_data, pointer_offset)[0]
        if pointer < content_start or pointer >= len(page_data):
            continue
        yield pointer
