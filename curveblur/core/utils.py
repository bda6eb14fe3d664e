"""Small numeric helpers shared by the render path."""

import math


def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves toward +inf."""
    return int(math.floor(x + 0.5))
