import re

DEFAULT_COUNT = 3
MIN_COUNT = 1
MAX_COUNT = 10


def _clamp_int(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def extract_count(request: str, default: int = DEFAULT_COUNT, lo: int = MIN_COUNT, hi: int = MAX_COUNT) -> int:
    """Read how many questions a free-text request asks for.

    The first run of ASCII digits wins ("2 DSA questions" -> 2) and is clamped
    to [lo, hi], the minimum and maximum allowed counts. Without any digits
    the default is returned unchanged.
    """
    if lo > hi:
        raise ValueError(f"Invalid count bounds: lo={lo} is greater than hi={hi}.")
    match = re.search(r"[0-9]+", request or "")
    if not match:
        return default
    digits = match.group(0).lstrip("0") or "0"
    # more digits than hi means larger than hi; skip int() on huge runs
    if len(digits) > len(str(max(hi, 0))):
        return hi
    return _clamp_int(int(digits), lo, hi)
