import collections

# Storage classes of a decoded column
NULL = "null"
INTEGER = "integer"
REAL = "real"
TEXT = "text"
BLOB = "blob"
RESERVED = "reserved"


FileImage = collections.namedtuple('FileImage', (
    'data',
    'page_size',
    'text_encoding',
))


class ColumnValue(collections.namedtuple('ColumnValue', ('storage_class', 'value'))):
    """
    One column of a record. TEXT values hold the raw bytes, REAL and BLOB
    columns keep their position but carry no value.
    """
    __slots__ = ()

    @property
    def is_int(self):
        return self.storage_class == INTEGER

    def text(self, encoding="utf-8"):
        if self.storage_class != TEXT:
            return ""
        return self.value.decode(encoding, errors="replace")


def null():
    return ColumnValue(NULL, None)


def integer(value):
    return ColumnValue(INTEGER, value)


def text(value):
    return ColumnValue(TEXT, bytes(value))
