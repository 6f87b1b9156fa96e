"""
Phone Number Utilities
E.164 normalisation for classifier lookups
"""
import re
from typing import Optional

_NON_DIGITS = re.compile(r"\D")


def format_e164(phone_number: str) -> Optional[str]:
    """
    Normalise a dialled/presented number to E.164.

    - 11 digits starting with 1 -> "+1..."
    - 10 digits -> assumed US, "+1" prefixed
    - already starting with "+" -> kept as given
    - anything else -> "+" followed by the digits

    Returns:
        The formatted number, or None when the input holds no digits
    """
    if not phone_number:
        return None

    digits = _NON_DIGITS.sub("", phone_number)
    if not digits:
        return None

    if len(digits) == 11 and digits.startswith("1"):
        return f"+{digits}"

    if len(digits) == 10:
        return f"+1{digits}"

    if phone_number.startswith("+"):
        return phone_number

    return f"+{digits}"
