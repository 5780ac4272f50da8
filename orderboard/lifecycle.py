"""Order lifecycle rules.

Pure functions over an order's ``status`` and ``timestamp``. Orders are the
wire-shaped dicts produced by ``Order.to_dict()``; nothing here touches the
database.
"""
import calendar
import math
from datetime import datetime, time, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"


class ViewBucket(str, Enum):
    KITCHEN_ACTIVE = "kitchen-active"
    READY_FOR_DELIVERY = "ready-for-delivery"
    ARCHIVED = "archived"


STATUS_VALUES = frozenset(s.value for s in OrderStatus)

_BUCKETS = {
    OrderStatus.PENDING.value: ViewBucket.KITCHEN_ACTIVE,
    OrderStatus.PREPARING.value: ViewBucket.KITCHEN_ACTIVE,
    OrderStatus.READY.value: ViewBucket.READY_FOR_DELIVERY,
    OrderStatus.DELIVERED.value: ViewBucket.ARCHIVED,
}

_TRANSITIONS = {
    OrderStatus.PENDING.value: frozenset({OrderStatus.PREPARING.value, OrderStatus.READY.value}),
    OrderStatus.PREPARING.value: frozenset({OrderStatus.READY.value}),
    OrderStatus.READY.value: frozenset({OrderStatus.DELIVERED.value}),
    OrderStatus.DELIVERED.value: frozenset(),
}

PRESET_RANGES = ("today", "yesterday", "this-week", "this-month")

_CENT = Decimal("0.01")


def _status_value(status):
    return status.value if isinstance(status, Enum) else status


def classify(order):
    """Return the display bucket for an order, or None for an unknown status."""
    return _BUCKETS.get(_status_value(order.get("status")))


def bucket_orders(orders):
    buckets = {bucket: [] for bucket in ViewBucket}
    for order in orders:
        bucket = classify(order)
        if bucket is not None:
            buckets[bucket].append(order)
    return buckets


def allowed_next_statuses(current, allow_skip_preparing=True):
    """Statuses an order may move to from ``current``.

    ``pending -> ready`` skips ``preparing``; it is allowed unless the policy
    flag turns it off.
    """
    current = _status_value(current)
    allowed = _TRANSITIONS.get(current, frozenset())
    if current == OrderStatus.PENDING.value and not allow_skip_preparing:
        allowed = allowed - {OrderStatus.READY.value}
    return allowed


def can_transition(current, new, allow_skip_preparing=True):
    return _status_value(new) in allowed_next_statuses(current, allow_skip_preparing)


def parse_timestamp(value):
    """Parse an ISO-8601 string into an aware datetime. Naive input is UTC."""
    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utcnow():
    return datetime.now(timezone.utc)


def elapsed_minutes(timestamp, now=None):
    now = parse_timestamp(now) if now is not None else utcnow()
    millis = (now - parse_timestamp(timestamp)) / timedelta(milliseconds=1)
    # halves round up, as on the order screens
    return int(math.floor(millis / 60000 + 0.5))


def compute_total(items):
    """Sum of ``price * quantity`` formatted with exactly two decimals."""
    total = sum(
        (Decimal(str(item["price"])) * int(item["quantity"]) for item in items),
        Decimal("0"),
    )
    return str(total.quantize(_CENT, rounding=ROUND_HALF_UP))


def date_range_filter(orders, start=None, end=None):
    """Archived orders whose timestamp falls inside ``[start, end]``."""
    start = parse_timestamp(start) if start is not None else None
    end = parse_timestamp(end) if end is not None else None
    selected = []
    for order in orders:
        if classify(order) is not ViewBucket.ARCHIVED:
            continue
        stamp = parse_timestamp(order["timestamp"])
        if start is not None and stamp < start:
            continue
        if end is not None and stamp > end:
            continue
        selected.append(order)
    return selected


def day_range(day):
    """UTC bounds covering one calendar date."""
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    end = datetime.combine(day, time.max, tzinfo=timezone.utc)
    return start, end


def preset_range(name, now=None):
    """UTC bounds for a named range. Weeks start on Sunday."""
    today = (parse_timestamp(now) if now is not None else utcnow()).astimezone(timezone.utc).date()
    if name == "today":
        return day_range(today)
    if name == "yesterday":
        return day_range(today - timedelta(days=1))
    if name == "this-week":
        # date.weekday(): Monday == 0, Sunday == 6
        sunday = today - timedelta(days=(today.weekday() + 1) % 7)
        return day_range(sunday)[0], day_range(sunday + timedelta(days=6))[1]
    if name == "this-month":
        last_day = calendar.monthrange(today.year, today.month)[1]
        return (
            day_range(today.replace(day=1))[0],
            day_range(today.replace(day=last_day))[1],
        )
    raise ValueError(f"unknown range preset: {name}")
