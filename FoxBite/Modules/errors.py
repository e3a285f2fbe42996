class FoxBiteError(Exception):
    """Base class for errors raised while reading a cookie store."""


class FormatError(FoxBiteError, ValueError):
    """The input is not a usable SQLite main database file."""


class MalformedCellError(FoxBiteError, ValueError):
    """A single cell or record could not be decoded. Recovered locally."""


class NotFoundError(FoxBiteError, LookupError):
    """A table or cookie that is expected to exist is missing."""


class ProfileError(FoxBiteError):
    """The Firefox profile holding the cookie store could not be located."""


class ConfigError(FoxBiteError):
    """config.json is missing, unreadable or not filled in."""
