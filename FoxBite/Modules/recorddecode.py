import logging
from Modules.errors import MalformedCellError
from Modules.tuples import ColumnValue, REAL, BLOB, RESERVED, null, integer, text
from Modules.varints import single_varint, multi_varint

logger = logging.getLogger(__name__)

# Serial types 1-6 map to big-endian signed integers of these widths
INTEGER_SIZES = {1: 1, 2: 2, 3: 3, 4: 4, 5: 6, 6: 8}


def decode_record(payload):
    """
    Decodes a record payload into a list of ColumnValue in header order.

    Returns None when the record header itself is unusable. A column that
    would read past the end of the payload ends the row at that column.
    """
    if len(payload) == 0:
        return None

    header_length, length = single_varint(payload)
    if length == 0 or header_length < length or header_length > len(payload):
        return None

    serial_types, _ = multi_varint(payload, length, header_length)

    columns = []
    offset = header_length
    for serial_type in serial_types:
        try:
            column_value, col_length = decode_column_value(serial_type, payload, offset)
        except MalformedCellError as e:
            logger.debug(f"Record truncated after {len(columns)} of {len(serial_types)} columns: {e}")
            break
        columns.append(column_value)
        offset += col_length
    return columns


def decode_column_value(serial_type, data, offset):
    """
    Decodes a single column value based on the SQLite serial type.
    """
    if serial_type == 0:  # NULL
        return null(), 0
    elif serial_type in INTEGER_SIZES:
        size = INTEGER_SIZES[serial_type]
        _check_bounds(serial_type, data, offset, size)
        return integer(int.from_bytes(data[offset:offset + size], "big", signed=True)), size
    elif serial_type == 7:  # FLOAT, value not needed
        _check_bounds(serial_type, data, offset, 8)
        return ColumnValue(REAL, None), 8
    elif serial_type == 8:  # Integer 0
        return integer(0), 0
    elif serial_type == 9:  # Integer 1
        return integer(1), 0
    elif serial_type in (10, 11):  # Reserved for internal use
        return ColumnValue(RESERVED, None), 0
    elif serial_type % 2 == 0:  # BLOB, value not needed
        blob_length = (serial_type - 12) // 2
        _check_bounds(serial_type, data, offset, blob_length)
        return ColumnValue(BLOB, None), blob_length
    else:  # Text
        text_length = (serial_type - 13) // 2
        _check_bounds(serial_type, data, offset, text_length)
        return text(data[offset:offset + text_length]), text_length


def _check_bounds(serial_type, data, offset, size):
    if offset + size > len(data):
        raise MalformedCellError(
            f"Serial type {serial_type} needs {size} bytes at offset {offset}, payload is {len(data)} bytes")
