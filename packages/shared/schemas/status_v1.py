"""Shared order status schema (v1).

Clients render the status picker from these options. Values must stay in sync with the
server-side status enum and remain stable once shipped.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class OrderStatusV1(str, Enum):
    WAITING = "waiting"
    COOKING = "cooking"
    READY = "ready"
    DONE = "done"


class StatusOptionV1(BaseModel):
    value: OrderStatusV1
    label: str
    description: str


STATUS_OPTIONS_V1: list[StatusOptionV1] = [
    StatusOptionV1(
        value=OrderStatusV1.WAITING,
        label="Waiting",
        description="New order received, waiting to be processed",
    ),
    StatusOptionV1(
        value=OrderStatusV1.COOKING,
        label="Cooking",
        description="Order is being cooked in the kitchen",
    ),
    StatusOptionV1(
        value=OrderStatusV1.READY,
        label="Ready",
        description="Order is ready to be served to the table",
    ),
    StatusOptionV1(
        value=OrderStatusV1.DONE,
        label="Done",
        description="Order is finished and paid",
    ),
]
