"""
Exceptions raised while decoding QFX/OFX documents.

Every error carries the offending tag or value and the enclosing record
as attributes, plus a readable message. Decoding is fail-fast: the first
error aborts the whole document.

Note: the tokenizer treats every '<' and '>' as a tag delimiter, so a
leaf value containing either character is split into extra tokens. Those
usually surface here as UnexpectedTokenError.
"""
from typing import Optional


class QFXParsingError(Exception):
    """Base class for all decode and load errors."""


class UnexpectedTokenError(QFXParsingError):
    """A token matched neither a known field nor the record terminator."""

    def __init__(self, token: str, record: Optional[str] = None, message: Optional[str] = None):
        self.token = token
        self.record = record
        if message is None:
            if record:
                message = f"Found unexpected token {token} in the {record} type"
            else:
                message = f"Found unexpected token {token}"
        super().__init__(message)


class UnexpectedEOFError(QFXParsingError):
    """The token stream ended before a terminator or value was seen."""

    def __init__(self, expected: str, record: Optional[str] = None, message: Optional[str] = None):
        self.expected = expected
        self.record = record
        if message is None:
            if record:
                message = f"Found unexpected EOF in the {record} type. Was still expecting the '{expected}' token"
            else:
                message = f"Found unexpected EOF. Was still expecting the '{expected}' token"
        super().__init__(message)


class MissingRequiredValueError(QFXParsingError):
    """A record terminator was reached while a required field was unset."""

    def __init__(self, field: str, record: str):
        self.field = field
        self.record = record
        super().__init__(f"{field} is a required value in {record}")


class UnexpectedDateFormatError(QFXParsingError):
    """A date-time value matched none of the accepted spellings."""

    def __init__(self, value: str, field: Optional[str] = None):
        self.value = value
        self.field = field
        where = f" for {field}" if field else ""
        super().__init__(f"Failed to parse datetime{where}: {value!r}")


class InvalidTransactionAmountError(QFXParsingError):
    """An amount value is not a finite decimal number."""

    def __init__(self, value: str, field: Optional[str] = None):
        self.value = value
        self.field = field
        where = f" for {field}" if field else ""
        super().__init__(f"Invalid transaction amount{where}: {value!r}")


class QFXFileNotFoundError(QFXParsingError):
    """Raised by the loader when the input file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"File not found: {path}")


class QFXFileReadError(QFXParsingError):
    """Raised by the loader when the input file cannot be read or decoded."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Error reading file {path}: {reason}")
