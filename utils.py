import random
import string
import time
from datetime import date

_BASE36 = string.digits + string.ascii_lowercase

def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))

def uid() -> str:
    '''Generate an identifier: base-36 epoch milliseconds plus 5 random characters.'''
    stamp = _to_base36(time.time_ns() // 1_000_000)
    suffix = "".join(random.choices(_BASE36, k=5))
    return stamp + suffix

def validate_stay_dates(check_in: date, check_out: date):
    '''Validate that check_out is strictly after check_in.'''
    if check_out <= check_in:
        raise ValueError("Check-out must be after check-in")

def nights(check_in: date, check_out: date) -> int:
    '''Number of nights between two dates, never negative.'''
    return max(0, (check_out - check_in).days)

def are_overlapping(start1: date, end1: date, start2: date, end2: date) -> bool:
    '''Check if two half-open [start, end) stays share at least one night.'''
    return start1 < end2 and start2 < end1
