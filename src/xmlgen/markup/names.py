"""XML name grammar.

Implements the ``Name`` production of XML 1.0 (fifth edition): a
``NameStartChar`` followed by any number of ``NameChar``. Tag names and
attribute keys are both checked against it before being written.
"""

import re
from typing import Any

_NAME_START_CHARS = (
    ":A-Z_a-z"
    r"\u00C0-\u00D6"
    r"\u00D8-\u00F6"
    r"\u00F8-\u02FF"
    r"\u0370-\u037D"
    r"\u037F-\u1FFF"
    r"\u200C-\u200D"
    r"\u2070-\u218F"
    r"\u2C00-\u2FEF"
    r"\u3001-\uD7FF"
    r"\uF900-\uFDCF"
    r"\uFDF0-\uFFFD"
    r"\U00010000-\U000EFFFF"
)

_NAME_CHARS = _NAME_START_CHARS + (
    r"\-.0-9"
    r"\u00B7"
    r"\u0300-\u036F"
    r"\u203F-\u2040"
)

NAME_PATTERN = re.compile(f"[{_NAME_START_CHARS}][{_NAME_CHARS}]*")


def is_valid_name(name: Any) -> bool:
    """Check whether ``name`` is a legal XML tag or attribute name.

    Args:
        name: Candidate name; anything other than a non-empty string is invalid

    Returns:
        True if the whole string matches the name grammar
    """
    if not isinstance(name, str) or not name:
        return False
    return NAME_PATTERN.fullmatch(name) is not None
