import re
from typing import Iterator

# Anything between two delimiters
_FRAGMENT = re.compile(r"[^<>]+")


def tokenize(content: str) -> Iterator[str]:
    """
    Split OFX text into tag names and leaf values.

    '<' and '>' are the only delimiters and no escaping is recognised.
    Fragments are stripped and empty ones dropped. Close tags keep their
    leading '/'. The result is a lazy, single-pass iterator.
    """
    for match in _FRAGMENT.finditer(content):
        fragment = match.group(0).strip()
        if fragment:
            yield fragment
