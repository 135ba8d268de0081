"""Unit parsing for the human-readable values printed by `docker stats`.

Every function here is total: unparseable input degrades to 0 instead of
raising, so one malformed column never aborts a sampling cycle.
"""

import math
import re
import sys

# Prefix letters in rank order; rank + 1 is the power of 1024
_PREFIXES = "kmgtp"

_PERCENT_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]*)?|\.[0-9]+")
_BINARY_PATTERN = re.compile(
    r"(?P<number>[0-9]+(?:\.[0-9]*)?|\.[0-9]+)\s?(?P<unit>[kmgtpKMGTP]i[Bb]|[Bb])"
)
_DECIMAL_PATTERN = re.compile(
    r"(?P<number>[0-9]+(?:\.[0-9]*)?|\.[0-9]+)\s?(?P<unit>[kmgtpKMGTP]?[Bb])"
)


def _unit_order(unit: str) -> int:
    """Return the rank of a byte unit (B=0, k=1, M=2, ...)."""
    if len(unit) == 1:
        return 0
    return _PREFIXES.index(unit[0].lower()) + 1


def _scaled(match: re.Match[str] | None) -> int:
    """Integer part of the matched number times 1024 to the unit rank.

    Results that cannot be represented as a finite float degrade to 0.
    """
    if match is None:
        return 0
    integer_part = match.group("number").split(".")[0] or "0"
    try:
        number = int(integer_part)
    except ValueError:
        # beyond the interpreter's int string conversion limit
        return 0
    scaled = number * 1024 ** _unit_order(match.group("unit"))
    if scaled > sys.float_info.max:
        return 0
    return scaled


def parse_percent(text: str) -> float:
    """Parse a percentage such as ``"12.34%"``.

    Args:
        text: Raw percentage text.

    Returns:
        The numeric value, or 0.0 when the text is not a plain decimal
        number such as ``12``, ``12.5`` or ``.5`` (docker prints ``--`` for
        stopped containers).
    """
    cleaned = re.sub(r"[\s%]+", "", text)
    if not _PERCENT_PATTERN.fullmatch(cleaned):
        return 0.0
    value = float(cleaned)
    if not math.isfinite(value):
        return 0.0
    return value


def parse_binary_bytes(text: str) -> int:
    """Parse an IEC size such as ``"512MiB"`` into bytes.

    Accepts B, kiB, MiB, GiB, TiB and PiB with a case-insensitive prefix
    letter and an optional single space before the unit. The fractional
    part of the number is dropped before scaling.

    Examples:
        >>> parse_binary_bytes("512MiB")
        536870912
        >>> parse_binary_bytes("1.5 GiB")
        1073741824
        >>> parse_binary_bytes("5XB")
        0
    """
    return _scaled(_BINARY_PATTERN.fullmatch(text))


def parse_decimal_bytes(text: str) -> int:
    """Parse a size such as ``"3.4MB"`` into bytes.

    Accepts B, kB, MB, GB, TB and PB. The multiplier is 1024 per rank,
    matching the values this service has always reported.
    """
    return _scaled(_DECIMAL_PATTERN.fullmatch(text))


def ratio_percent(used: float, total: float) -> float:
    """Return ``used`` as a percentage of ``total`` rounded to 2 decimals.

    Returns 0.0 when ``total`` is zero or the ratio is not a finite float.
    """
    if total == 0:
        return 0.0
    try:
        percent = float(used) * 100 / float(total)
    except OverflowError:
        return 0.0
    if not math.isfinite(percent):
        return 0.0
    return round(percent, 2)
