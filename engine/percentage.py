"""Free-form percentage strings ("80 %") to fractions."""

import re

_NUMBER = re.compile(r"(\d+(?:\.\d+)?)")
_UNAVAILABLE = "unavailable"


def parse_percentage(text) -> float:
    """Return the first number in ``text`` divided by 100.

    Missing, unparseable or "Unavailable" input gives 0.0, never an error.
    """
    if text is None or isinstance(text, bool):
        return 0.0
    if not isinstance(text, str):
        text = str(text)
    text = text.strip()
    if not text or text.lower() == _UNAVAILABLE:
        return 0.0
    match = _NUMBER.search(text)
    if not match:
        return 0.0
    return float(match.group(1)) / 100.0
