import math
import random
import re

from repguess.exceptions import InvalidInput
from repguess.models import Difficulty

# Plain ASCII decimal notation only: no digit separators or non-ASCII digits
_NUMBER_RE = re.compile(r'[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?')


def draw_target(difficulty: Difficulty, rng=random) -> int:
    """Draw a target uniformly from the difficulty's inclusive range."""
    low, high = difficulty.bounds
    return math.floor(rng.random() * (high - low + 1)) + low


def parse_guess(raw, reject_zero: bool = True):
    """Turn raw text from the input field into a number.

    Blank text, anything that is not a finite number and (unless
    ``reject_zero`` is off) an exact zero raise :class:`InvalidInput`.
    Integral values come back as ``int`` so they compare and display
    like the targets do.
    """
    text = '' if raw is None else str(raw).strip()
    if not _NUMBER_RE.fullmatch(text):
        raise InvalidInput(raw)
    try:
        value = float(text)
    except ValueError:
        raise InvalidInput(raw) from None
    if not math.isfinite(value):
        raise InvalidInput(raw)
    if reject_zero and value == 0:
        raise InvalidInput(raw)
    if value.is_integer():
        return int(value)
    return value


def guess_from_payload(data):
    """Pick the raw guess out of an HTTP body or socket event payload.

    ``{"guess": ...}`` and a bare string or number are both accepted.
    A missing payload gives None (use the input buffer); any other shape
    gives blank text, which :func:`parse_guess` rejects.
    """
    if data is None:
        return None
    if isinstance(data, dict):
        return data.get('guess')
    if isinstance(data, (str, int, float)) and not isinstance(data, bool):
        return data
    return ''


def payload_dict(data):
    return data if isinstance(data, dict) else {}


def compute_points(attempts: int, timer: int) -> int:
    """Points for a won round.

    Fewer attempts and more time left pay more; never less than 1.
    ``attempts`` includes the winning guess.
    """
    return max(10 - attempts + timer // 5, 1)
