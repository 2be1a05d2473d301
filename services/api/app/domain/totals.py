from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from services.api.app.domain.types import LineItem


def compute_total(items: Iterable[LineItem]) -> int:
    """Sum of unit price times quantity, in integer minor units."""

    return sum(item.unit_price * item.quantity for item in items)
