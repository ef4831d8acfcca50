"""Integer arithmetic utilities for cents-based balances and ticket prices.

All costs, amounts, and balances use int (cents). No float, no Decimal.
"""

# Largest value a BIGINT money column can hold
MAX_CENTS = 2**63 - 1


def cents_to_display(cents: int) -> str:
    """Convert cents to display string: 5000 -> '$50.00', -1200 -> '-$12.00'."""
    if cents < 0:
        abs_cents = -cents
        return f"-${abs_cents // 100:,}.{abs_cents % 100:02d}"
    return f"${cents // 100:,}.{cents % 100:02d}"


def is_valid_cost(cents: int) -> bool:
    """A ticket may be given away (0) but never carry a negative cost."""
    return cents >= 0
