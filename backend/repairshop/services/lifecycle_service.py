# Overview: Transition tables for repair orders and inventory update requests.

"""
Repair Shop Lifecycle Rules

================================================================================
REPAIR ORDERS
================================================================================

    pending -> in-progress -> repaired -> delivered
       |            |
       +------------+--> cancelled

    - pending may jump straight to repaired (quick fixes done at the counter)
    - delivered and cancelled are terminal
    - same-status "transitions" are allowed; callers use them to update notes
    - "completed" is accepted as an input alias of repaired

Only order_status is stored. The coarse status shown on dashboards is
derived by coarse_status() and never written.

================================================================================
INVENTORY UPDATE REQUESTS
================================================================================

    pending -> approved
            -> denied

    - approved and denied are terminal; reviewing twice is rejected
    - only approval changes the item's quantity

================================================================================
"""

from __future__ import annotations

from ..models import CoarseStatus, OrderStatus, RequestStatus


ORDER_STATUS_ALIASES = {
    "completed": OrderStatus.REPAIRED,
}

REPAIR_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.IN_PROGRESS, OrderStatus.REPAIRED, OrderStatus.CANCELLED}),
    OrderStatus.IN_PROGRESS: frozenset({OrderStatus.REPAIRED, OrderStatus.CANCELLED}),
    OrderStatus.REPAIRED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

REQUEST_TRANSITIONS: dict[RequestStatus, frozenset[RequestStatus]] = {
    RequestStatus.PENDING: frozenset({RequestStatus.APPROVED, RequestStatus.DENIED}),
    RequestStatus.APPROVED: frozenset(),
    RequestStatus.DENIED: frozenset(),
}

_COARSE_BY_ORDER_STATUS = {
    OrderStatus.PENDING: CoarseStatus.PENDING,
    OrderStatus.IN_PROGRESS: CoarseStatus.IN_PROGRESS,
    OrderStatus.REPAIRED: CoarseStatus.COMPLETED,
    OrderStatus.DELIVERED: CoarseStatus.DELIVERED,
    OrderStatus.CANCELLED: CoarseStatus.CANCELLED,
}


class LifecycleError(ValueError):
    """
    Raised when a status value is not part of a lifecycle.

    Illegal transitions between valid statuses are reported as mutation
    outcomes, not raised.
    """
    pass


def parse_order_status(value) -> OrderStatus:
    """
    Coerce user input to an OrderStatus.

    Accepts enum members, canonical values ("in-progress") and the
    "completed" alias. Matching ignores case and surrounding whitespace.

    Raises:
        LifecycleError: for anything else
    """
    if isinstance(value, OrderStatus):
        return value
    if not isinstance(value, str):
        raise LifecycleError("status must be a string")

    key = value.strip().lower()
    if key in ORDER_STATUS_ALIASES:
        return ORDER_STATUS_ALIASES[key]
    try:
        return OrderStatus(key)
    except ValueError:
        allowed = sorted([s.value for s in OrderStatus] + list(ORDER_STATUS_ALIASES))
        raise LifecycleError(
            f"Invalid status '{value}'. Must be one of: {', '.join(allowed)}"
        ) from None


def can_transition_repair(from_status: OrderStatus, to_status: OrderStatus) -> bool:
    if from_status == to_status:
        return True
    return to_status in REPAIR_TRANSITIONS[from_status]


def can_transition_request(from_status: RequestStatus, to_status: RequestStatus) -> bool:
    # No same-status case here: re-reviewing a request must not re-stamp it.
    return to_status in REQUEST_TRANSITIONS[from_status]


def next_repair_statuses(current: OrderStatus) -> list[OrderStatus]:
    """Statuses a client may offer as the next step, in lifecycle order."""
    allowed = REPAIR_TRANSITIONS[current]
    return [status for status in OrderStatus if status in allowed]


def coarse_status(order_status: OrderStatus) -> CoarseStatus:
    return _COARSE_BY_ORDER_STATUS[order_status]


def is_active(order_status: OrderStatus) -> bool:
    """Repairs still on the bench."""
    return order_status is OrderStatus.IN_PROGRESS


def is_awaiting_delivery(order_status: OrderStatus) -> bool:
    return coarse_status(order_status) is CoarseStatus.COMPLETED
