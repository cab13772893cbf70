"""Display helpers for agent cards."""

import math
from typing import Tuple


def format_number(num: float) -> str:
    """Compact count: 1500 -> '1.5K', 2300000 -> '2.3M'."""
    if num >= 1000000:
        return f"{num / 1000000:.1f}M"
    if num >= 1000:
        return f"{num / 1000:.1f}K"
    return str(num)


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length - 3] + '...'


def star_breakdown(rating: float) -> Tuple[int, int, int]:
    """
    Split a 0-5 rating into stars.

    Args:
        rating: Star rating

    Returns:
        (full, half, empty) star counts summing to 5
    """
    rating = min(max(rating, 0.0), 5.0)
    full = math.floor(rating)
    half = 1 if rating % 1 >= 0.5 else 0
    empty = 5 - full - half
    return full, half, empty
