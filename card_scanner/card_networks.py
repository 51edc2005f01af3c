"""Card number validation and network classification."""

from __future__ import annotations

import re
from typing import Pattern, Tuple

from .ocr_types import CardNetwork

# Issuer prefix and length ranges.
CREDIT_CARD_PATTERN: Pattern[str] = re.compile(
    r"^(?:4[0-9]{12}(?:[0-9]{3})?"
    r"|[25][1-7][0-9]{14}"
    r"|6(?:011|5[0-9][0-9])[0-9]{12}"
    r"|3[47][0-9]{13}"
    r"|3(?:0[0-5]|[68][0-9])[0-9]{11}"
    r"|(?:2131|1800|35\d{3})\d{11})"
)

EXPIRY_DATE_PATTERN: Pattern[str] = re.compile(r"[0-9]{2}/[0-9]{2}")

VISA = CardNetwork(name="Visa", icon="ic_visa")
MASTERCARD = CardNetwork(name="Mastercard", icon="ic_mastercard")
AMEX = CardNetwork(name="American Express", icon="ic_amex")
DISCOVER = CardNetwork(name="Discover", icon="ic_discover")
DINERS = CardNetwork(name="Diners Club", icon="ic_diners")
JCB = CardNetwork(name="JCB", icon="ic_jcb")
UNIONPAY = CardNetwork(name="UnionPay", icon="ic_unionpay")
UNKNOWN_NETWORK = CardNetwork(name="Unknown", icon="ic_card_unknown")

# Checked in order; JCB's 2131 prefix must win over the Mastercard 2-series.
_NETWORK_PATTERNS: Tuple[Tuple[Pattern[str], CardNetwork], ...] = (
    (re.compile(r"4[0-9]{12}(?:[0-9]{3})?"), VISA),
    (re.compile(r"3[47][0-9]{13}"), AMEX),
    (re.compile(r"3(?:0[0-5]|[68][0-9])[0-9]{11}"), DINERS),
    (re.compile(r"(?:2131|1800|35[0-9]{3})[0-9]{11}"), JCB),
    (re.compile(r"6(?:011|5[0-9]{2})[0-9]{12}"), DISCOVER),
    (
        re.compile(
            r"(?:5[1-5][0-9]{2}|222[1-9]|22[3-9][0-9]|2[3-6][0-9]{2}|27[01][0-9]|2720)[0-9]{12}"
        ),
        MASTERCARD,
    ),
    (re.compile(r"62[0-9]{14,17}"), UNIONPAY),
)


def is_card_number_valid(text: str) -> bool:
    """Return True when ``text`` with spaces removed is a full card-number match."""
    return CREDIT_CARD_PATTERN.fullmatch(text.replace(" ", "")) is not None


def get_card_type(card_number: str) -> CardNetwork:
    """Classify a digit string by issuer prefix and length.

    Numbers that pass :data:`CREDIT_CARD_PATTERN` but fall outside every
    issuer range (for example ``57...`` or ``21...``) map to
    :data:`UNKNOWN_NETWORK`.
    """
    digits = card_number.replace(" ", "")
    for pattern, network in _NETWORK_PATTERNS:
        if pattern.fullmatch(digits):
            return network
    return UNKNOWN_NETWORK
