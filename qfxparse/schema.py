"""
Declarative record descriptions consumed by the record decoder.

OFX leaf elements never emit a closing tag while containers always do.
The field kind says which one a tag is, so the decoder never has to guess
from the token stream.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class FieldKind(Enum):
    """How a tag is consumed and how often it must appear"""
    REQUIRED_SCALAR = "required_scalar"
    OPTIONAL_SCALAR = "optional_scalar"
    REQUIRED_DATETIME = "required_datetime"
    REQUIRED_AMOUNT = "required_amount"
    REQUIRED_NESTED = "required_nested"
    OPTIONAL_NESTED = "optional_nested"
    REPEATED_NESTED = "repeated_nested"

    @property
    def is_leaf(self) -> bool:
        return self in _LEAF_KINDS

    @property
    def is_required(self) -> bool:
        return self in _REQUIRED_KINDS

    @property
    def is_repeated(self) -> bool:
        return self is FieldKind.REPEATED_NESTED


_LEAF_KINDS = frozenset({
    FieldKind.REQUIRED_SCALAR,
    FieldKind.OPTIONAL_SCALAR,
    FieldKind.REQUIRED_DATETIME,
    FieldKind.REQUIRED_AMOUNT,
})

_REQUIRED_KINDS = frozenset({
    FieldKind.REQUIRED_SCALAR,
    FieldKind.REQUIRED_DATETIME,
    FieldKind.REQUIRED_AMOUNT,
    FieldKind.REQUIRED_NESTED,
})


@dataclass(frozen=True)
class FieldRule:
    """
    One field of a record.

    Attributes:
        tag: Tag name in the document, e.g. TRNAMT
        attr: Attribute name on the record type, e.g. trans_amount
        kind: Consumption and cardinality rule
        schema: Sub-schema, only for nested kinds
        singleton: Reject a second occurrence instead of overwriting
    """
    tag: str
    attr: str
    kind: FieldKind
    schema: Optional["RecordSchema"] = None
    singleton: bool = False

    def __post_init__(self):
        if self.kind.is_leaf and self.schema is not None:
            raise ValueError(f"Leaf field {self.tag} cannot have a sub-schema")
        if not self.kind.is_leaf and self.schema is None:
            raise ValueError(f"Nested field {self.tag} needs a sub-schema")


@dataclass(frozen=True)
class RecordSchema:
    """
    A record type: its opening tag, the class to build and its fields.

    The record ends at the close tag '/' + name.
    """
    name: str
    record_type: type
    fields: Tuple[FieldRule, ...]

    def __post_init__(self):
        tags = [rule.tag for rule in self.fields]
        duplicates = {tag for tag in tags if tags.count(tag) > 1}
        if duplicates:
            raise ValueError(f"Duplicate tags in {self.name}: {sorted(duplicates)}")

    @property
    def terminator(self) -> str:
        return f"/{self.name}"

    def rule_for(self, tag: str) -> Optional[FieldRule]:
        for rule in self.fields:
            if rule.tag == tag:
                return rule
        return None
