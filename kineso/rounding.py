"""
Fixed-Point Rounding
====================
Decimal rounding that matches the browser's ``Number.prototype.toFixed``:

  - ties are broken away from zero, on the exact binary value
    (0.0078125 → '0.007813', where ``f'{x:.6f}'`` gives '0.007812')
  - an exact zero prints without a sign ((-0.0) → '0.000000')
  - a negative value that rounds to zero keeps its sign ('-0.000000')

Both the generator's 8-decimal rounding and every text export go through
here so stored values and exported digits agree.
"""

import math
from decimal import Decimal, ROUND_HALF_UP


def to_fixed(value: float, decimals: int) -> str:
    """Format ``value`` with exactly ``decimals`` fractional digits."""
    value = float(value)
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value == 0.0:
        value = 0.0  # drops the sign of -0.0

    quantum = Decimal(1).scaleb(-decimals)
    # quantize keeps the sign, so -1e-9 still prints as '-0.000000'
    return format(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP), 'f')


def round_fixed(value: float, decimals: int) -> float:
    """``float(to_fixed(value, decimals))``; non-finite values pass through."""
    value = float(value)
    if not math.isfinite(value):
        return value
    return float(to_fixed(value, decimals))
