"""
Decoder for OFX/QFX bank and credit card statement files.
"""
from .config import DecoderOptions, load_options
from .decoder import RecordDecoder, decode
from .errors import (
    InvalidTransactionAmountError,
    MissingRequiredValueError,
    QFXFileNotFoundError,
    QFXFileReadError,
    QFXParsingError,
    UnexpectedDateFormatError,
    UnexpectedEOFError,
    UnexpectedTokenError,
)
from .loader import QFXLoader, locate_envelope
from .models import QFXDocument
from .tokenizer import tokenize

__all__ = [
    'DecoderOptions',
    'load_options',
    'RecordDecoder',
    'decode',
    'InvalidTransactionAmountError',
    'MissingRequiredValueError',
    'QFXFileNotFoundError',
    'QFXFileReadError',
    'QFXParsingError',
    'UnexpectedDateFormatError',
    'UnexpectedEOFError',
    'UnexpectedTokenError',
    'QFXLoader',
    'locate_envelope',
    'QFXDocument',
    'tokenize',
]
