"""
Frequency-spec parsing and matching.

Towers carry their operating frequency as free text such as ``"5 GHz"``,
``"5800mhz"`` or ``"2.4"``. Two towers can only be linked when their texts
resolve to the same frequency, so the parsing convention below decides
link compatibility and must not drift.
"""
import math
import re
from typing import Optional

# Leading decimal prefix, like a lenient float parse of "5.8 GHz" -> 5.8
_NUMBER_PREFIX = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')

UNIT_MULTIPLIERS = (
    ('ghz', 1e9),
    ('mhz', 1e6),
    ('hz', 1.0),
)

DEFAULT_RELATIVE_TOLERANCE = 1e-6


def _leading_number(text: str) -> float:
    match = _NUMBER_PREFIX.match(text)
    if match is None:
        return math.nan
    return float(match.group(0))


def parse_frequency_hz(spec: Optional[str]) -> float:
    """
    Resolve a frequency spec to Hertz.

    Accepted format is ``"<number>[ ]<unit>"`` with unit one of hz, mhz, ghz
    (case-insensitive, optional whitespace). A bare number of 1 or more is
    read as GHz; below 1 it is read as MHz.

    Args:
        spec: Frequency text as entered by the user

    Returns:
        Frequency in Hz, or NaN when the text cannot be resolved to a
        positive finite frequency. Zero counts as unresolved, so "0 GHz"
        towers never link.

    Example:
        >>> parse_frequency_hz("5 GHz")
        5000000000.0
        >>> parse_frequency_hz("0.5")
        500000.0
    """
    if not spec:
        return math.nan

    text = str(spec).strip().lower()

    for unit, multiplier in UNIT_MULTIPLIERS:
        if text.endswith(unit):
            value = _leading_number(text) * multiplier
            break
    else:
        number = _leading_number(text)
        if math.isnan(number):
            return math.nan
        value = number * 1e9 if number >= 1 else number * 1e6

    if not math.isfinite(value) or value <= 0:
        return math.nan
    return value


def frequencies_match(freq_a_hz: float, freq_b_hz: float,
                      rel_tol: float = DEFAULT_RELATIVE_TOLERANCE) -> bool:
    """
    Check whether two frequencies are equal within a relative tolerance.

    The tolerance is taken relative to the larger of the two values. NaN on
    either side never matches.
    """
    if math.isnan(freq_a_hz) or math.isnan(freq_b_hz):
        return False
    return abs(freq_a_hz - freq_b_hz) <= rel_tol * max(freq_a_hz, freq_b_hz)


def specs_match(spec_a: Optional[str], spec_b: Optional[str],
                rel_tol: float = DEFAULT_RELATIVE_TOLERANCE) -> bool:
    """Check whether two frequency texts resolve to the same frequency."""
    return frequencies_match(parse_frequency_hz(spec_a), parse_frequency_hz(spec_b), rel_tol)
