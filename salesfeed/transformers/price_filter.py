"""
Acceptance rule for feed events
"""

from decimal import Decimal, ROUND_HALF_EVEN
from schemas.feed import RawEvent
import logging

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def to_cents(value: float) -> Decimal:
    """
    Round a currency amount to two decimals.

    The float is converted exactly (``Decimal(0.1)``, not ``Decimal("0.1")``)
    and rounded half-even, which is what ``round(value, 2)`` does.
    """
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_EVEN)


class ItemFilter:
    """
    Accept only sales where the buyer paid strictly more than the price.

    Both amounts are compared as two-decimal fixed-point values, so
    ``5.010000001`` paid for ``5.01`` is not an overpayment.
    """

    def accept(self, event: RawEvent) -> bool:
        accepted = to_cents(event.amount_paid) > to_cents(event.item_price)
        if not accepted:
            logger.debug(
                f"Rejected event {event.utc_date}: "
                f"paid {event.amount_paid} for price {event.item_price}"
            )
        return accepted
