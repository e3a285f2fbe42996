import struct
import logging
from Modules.errors import FormatError
from Modules.tuples import FileImage

logger = logging.getLogger(__name__)

SQLITE_MAGIC = b'SQLite format 3\x00'
HEADER_SIZE = 100
# Page 1 must hold the 100-byte file header
MIN_PAGE_SIZE = 100
MAX_PAGE_SIZE = 65536

TEXT_ENCODINGS = {0: "utf-8", 1: "utf-8", 2: "utf-16-le", 3: "utf-16-be"}


def parse_sqlite_header(data):
    """
    Parses the SQLite database file header from the start of the file image.
    """
    if len(data) < HEADER_SIZE:
        raise FormatError("File too small to be a valid SQLite database.")

    header = bytes(data[:HEADER_SIZE])
    magic_string = header[:16]
    # Checks if the input file is a valid SQLite database
    if magic_string != SQLITE_MAGIC:
        raise FormatError(f"Invalid SQLite database signature: {magic_string!r}")

    database_page_size = struct.unpack('>H', header[16:18])[0]
    # 65536 does not fit in 2 bytes so it is stored as 1
    page_size = MAX_PAGE_SIZE if database_page_size == 1 else database_page_size
    if page_size < MIN_PAGE_SIZE or page_size & (page_size - 1):
        raise FormatError(f"Invalid page size in header: {database_page_size}")

    database_text_encoding = struct.unpack('>I', header[56:60])[0]
    if database_text_encoding not in TEXT_ENCODINGS:
        logger.warning(f"Unknown text encoding {database_text_encoding} in header, reading text as UTF-8")

    return {
        "page_size": page_size,
        "write_version": header[18],
        "read_version": header[19],
        "reserved_bytes": header[20],
        "file_change_counter": struct.unpack('>I', header[24:28])[0],
        "database_size": struct.unpack('>I', header[28:32])[0],
        "first_freelist_trunk_page": struct.unpack('>I', header[32:36])[0],
        "freelist_pages": struct.unpack('>I', header[36:40])[0],
        "schema_format": struct.unpack('>I', header[44:48])[0],
        "auto_vacuum": struct.unpack('>I', header[52:56])[0],
        "text_encoding": TEXT_ENCODINGS.get(database_text_encoding, "utf-8"),
        "user_version": struct.unpack('>i', header[60:64])[0],
        "application_id": struct.unpack('>i', header[68:72])[0],
        "sqlite_version": struct.unpack('>I', header[96:100])[0],
    }


def load_file_image(data):
    """
    Validates the header and wraps the raw file bytes for page addressing.
    """
    header = parse_sqlite_header(data)
    logger.debug(f"Page size {header['page_size']}, {len(data) // header['page_size']} pages, "
                 f"text encoding {header['text_encoding']}")
    return FileImage(memoryview(bytes(data)), header["page_size"], header["text_encoding"])


def get_page(image, page_number):
    """
    Returns a view of a 1-based page, or None when the page lies outside the file.
    """
    page_offset = (page_number - 1) * image.page_size
    if page_offset < 0 or page_offset + image.page_size > len(image.data):
        return None
    return image.data[page_offset:page_offset + image.page_size]
