"""Exceptions raised while decoding Unified Log data."""


class ParseError(ValueError):
    """Raised when binary log data is truncated or malformed."""