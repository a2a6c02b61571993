"""Display helpers for calculation results."""

import math

CURRENCY_SYMBOL = "₹"


def format_currency(amount: float) -> str:
    """Render an amount in rupees with Indian digit grouping, e.g. ₹1,38,041.98."""
    if not math.isfinite(amount):
        raise ValueError(f"cannot format non-finite amount: {amount!r}")

    sign = "-" if amount < 0 else ""
    whole, fraction = f"{abs(amount):.2f}".split(".")

    # last three digits form one group, the rest are grouped in pairs
    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    groups.append(tail)

    return f"{CURRENCY_SYMBOL}{sign}{','.join(groups)}.{fraction}"
