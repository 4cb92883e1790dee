"""
Schema-driven record decoder.

One decoder walks one token stream. Every record type is decoded by the
same loop; the schema tables in ofx_schema.py supply the tags, the field
kinds and the record class to build.
"""
from typing import Any, Dict, Iterable, Iterator, Optional

from qfxparse.config import DecoderOptions
from qfxparse.errors import (
    MissingRequiredValueError,
    UnexpectedEOFError,
    UnexpectedTokenError,
)
from qfxparse.logging_config import get_logger
from qfxparse.models import QFXDocument
from qfxparse.normalizers import parse_amount, parse_ofx_datetime
from qfxparse.ofx_schema import DOCUMENT_SCHEMA
from qfxparse.schema import FieldKind, FieldRule, RecordSchema
from qfxparse.tokenizer import tokenize

logger = get_logger(__name__)

ENVELOPE_TAG = 'OFX'


class RecordDecoder:
    """
    Decodes records from a shared, forward-only token cursor.

    Nested records are decoded recursively on the same cursor, so a token
    consumed by one record is never seen by another.
    """

    def __init__(self, tokens: Iterable[str], options: Optional[DecoderOptions] = None):
        self._tokens: Iterator[str] = iter(tokens)
        self.options = options or DecoderOptions()

    def next_token(self) -> Optional[str]:
        """Advance the cursor; None once the stream is exhausted"""
        return next(self._tokens, None)

    def remaining(self) -> Iterator[str]:
        """Tokens not consumed yet"""
        return self._tokens

    def decode(self, schema: RecordSchema) -> Any:
        """
        Decode one record of the given schema.

        The cursor must sit just after the record's opening tag. Returns
        once the terminator is consumed.

        Raises:
            UnexpectedEOFError: If the stream ends before the terminator
            UnexpectedTokenError: On a tag the schema does not know
            MissingRequiredValueError: If a required field is unset at the terminator
            UnexpectedDateFormatError: On a malformed date-time value
            InvalidTransactionAmountError: On a malformed amount value
        """
        values: Dict[str, Any] = {}
        for rule in schema.fields:
            if rule.kind.is_repeated:
                values[rule.attr] = []

        while True:
            token = self.next_token()
            if token is None:
                raise UnexpectedEOFError(schema.terminator, schema.name)

            if token == schema.terminator:
                return self._build(schema, values)

            rule = schema.rule_for(token)
            if rule is None:
                raise UnexpectedTokenError(token, schema.name)

            if rule.kind.is_repeated:
                values[rule.attr].append(self.decode(rule.schema))
                continue

            if rule.attr in values:
                self._check_reoccurrence(schema, rule)

            if rule.kind.is_leaf:
                values[rule.attr] = self._read_value(schema, rule)
            else:
                values[rule.attr] = self.decode(rule.schema)

    def _read_value(self, schema: RecordSchema, rule: FieldRule) -> Any:
        """Pull the value token that follows a leaf tag and normalize it"""
        raw = self.next_token()
        if raw is None:
            raise UnexpectedEOFError(
                rule.tag,
                schema.name,
                f"Expected token following the {rule.tag} token in {schema.name}",
            )

        if rule.kind is FieldKind.REQUIRED_DATETIME:
            return parse_ofx_datetime(raw, rule.tag)
        if rule.kind is FieldKind.REQUIRED_AMOUNT:
            return parse_amount(raw, rule.tag)
        return raw

    def _check_reoccurrence(self, schema: RecordSchema, rule: FieldRule):
        """A field seen twice is an error for singletons, otherwise last write wins"""
        if rule.singleton or self.options.strict_singletons:
            raise UnexpectedTokenError(
                rule.tag,
                schema.name,
                f"The value for {rule.tag} in {schema.name} is already set",
            )
        logger.warning("Overwriting repeated field", record=schema.name, tag=rule.tag)

    def _build(self, schema: RecordSchema, values: Dict[str, Any]) -> Any:
        for rule in schema.fields:
            if rule.kind.is_required and rule.attr not in values:
                raise MissingRequiredValueError(rule.tag, schema.name)
            if rule.kind.is_repeated:
                values[rule.attr] = tuple(values[rule.attr])

        record = schema.record_type(**values)
        logger.debug("Decoded record", record=schema.name, fields=len(values))
        return record


def decode(content: str, options: Optional[DecoderOptions] = None) -> QFXDocument:
    """
    Decode an OFX envelope into a QFXDocument.

    The text must begin at the <OFX> tag; header lines before it are the
    loader's concern. Anything after </OFX> is ignored.

    Raises:
        QFXParsingError: The first error found anywhere in the document
    """
    decoder = RecordDecoder(tokenize(content), options)

    first = decoder.next_token()
    if first is None:
        raise UnexpectedEOFError(ENVELOPE_TAG)
    if first != ENVELOPE_TAG:
        raise UnexpectedTokenError(
            first,
            message=f"Found an unexpected token. Expecting: {ENVELOPE_TAG}, Found {first}",
        )

    document = decoder.decode(DOCUMENT_SCHEMA)

    if next(decoder.remaining(), None) is not None:
        logger.debug("Ignoring content after the envelope", terminator=DOCUMENT_SCHEMA.terminator)
    return document
