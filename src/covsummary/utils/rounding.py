"""Decimal-correct rounding for reported coverage totals."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_EVEN, Context, Decimal

DEFAULT_PLACES = 1

# Wide enough for the exact expansion of any finite double.
_EXACT_CONTEXT = Context(prec=800)


def round_half_even(value: float, places: int = DEFAULT_PLACES) -> float:
    """Round ``value`` to ``places`` decimals using round-half-to-even.

    The float is converted to its exact binary value before quantizing, so a
    tie is only resolved towards the even digit when the stored double is
    really on the midpoint (``2.25`` -> ``2.2``, while the double closest to
    ``2.35`` sits just above the tie and gives ``2.4``).
    """
    if not math.isfinite(value):
        return value
    exponent = Decimal(1).scaleb(-places)
    quantized = Decimal(value).quantize(exponent, rounding=ROUND_HALF_EVEN, context=_EXACT_CONTEXT)
    return float(quantized)
