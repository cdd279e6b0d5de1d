"""
numinv - Number Normalization

Converts the raw, system-native numbers the inventory server hands out
(extensions, line URIs, station numbers) into E.164.

Normalization never fails. Inputs that cannot be mapped cleanly still
produce a best-effort result and carry a diagnostic, which
``normalize_number`` also reports as a logging warning.

Example:
    >>> normalize_number("(320) 555-1011")
    '+13205551011'
    >>> parse_number("5551011").diagnostic
    <NumberDiagnostic.EXTENSION_ONLY: 'extension_only'>
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger("numinv.numbers")

_NON_DIGITS = re.compile(r"\D")


class NumberDiagnostic(str, Enum):
    """Non-fatal advisories produced while normalizing."""
    UNEXPECTED_FORMAT = "unexpected_format"
    EXTENSION_ONLY = "extension_only"


@dataclass(frozen=True)
class NormalizedNumber:
    """Result of normalizing one raw number."""
    raw: str
    digits: str
    canonical: str
    diagnostic: Optional[NumberDiagnostic] = None

    @property
    def is_e164(self) -> bool:
        return self.canonical.startswith("+")


def parse_number(raw: str) -> NormalizedNumber:
    """
    Normalize a raw number and report any diagnostic as a value.

    Classification is by digit count after every non-digit character
    has been removed:

    - 10 digits: North American number, ``+1`` is prepended
    - 11 digits starting with 1: ``+`` is prepended
    - 7 digits: a bare extension, returned unchanged (EXTENSION_ONLY)
    - anything else: ``+`` is prepended (UNEXPECTED_FORMAT)

    Args:
        raw: Number as stored on the telephony system

    Returns:
        NormalizedNumber with the canonical form and optional diagnostic
    """
    digits = _NON_DIGITS.sub("", raw or "")
    length = len(digits)

    if length == 10:
        return NormalizedNumber(raw, digits, f"+1{digits}")
    if length == 11 and digits.startswith("1"):
        return NormalizedNumber(raw, digits, f"+{digits}")
    if length == 7:
        return NormalizedNumber(raw, digits, digits, NumberDiagnostic.EXTENSION_ONLY)
    return NormalizedNumber(raw, digits, f"+{digits}", NumberDiagnostic.UNEXPECTED_FORMAT)


def normalize_number(raw: str) -> str:
    """
    Convert a raw number to its canonical E.164 form.

    Diagnostics are logged as warnings and never abort the caller.

    Args:
        raw: Number as stored on the telephony system

    Returns:
        The canonical number string
    """
    result = parse_number(raw)
    if result.diagnostic is NumberDiagnostic.EXTENSION_ONLY:
        logger.warning(f"'{raw}' looks like an extension without a country code; left as-is")
    elif result.diagnostic is NumberDiagnostic.UNEXPECTED_FORMAT:
        logger.warning(
            f"'{raw}' has {len(result.digits)} digits, expected 10 or 11 starting with 1; "
            f"using {result.canonical}"
        )
    return result.canonical
