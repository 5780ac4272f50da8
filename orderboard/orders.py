"""Order operations shared by the JSON API and the server-rendered views.

Validation, total recomputation and transition enforcement live here so both
entry points apply the same rules before anything reaches the store.
"""
import secrets
import time
from datetime import date
from decimal import Decimal, InvalidOperation

from flask import current_app

from . import store
from .errors import InvalidTransition, ValidationError
from .lifecycle import (
    OrderStatus,
    STATUS_VALUES,
    ViewBucket,
    bucket_orders,
    can_transition,
    compute_total,
    date_range_filter,
    day_range,
    elapsed_minutes,
    parse_timestamp,
    preset_range,
    utcnow,
)
from .logging import get_logger

log = get_logger(__name__)

PAYMENT_METHODS = {"card", "cash"}


def new_order_id():
    # millisecond clock plus a short random suffix so bursts never collide
    return f"ORD-{int(time.time() * 1000)}-{secrets.token_hex(2)}"


def _validate_items(items):
    if not isinstance(items, list) or not items:
        raise ValidationError("items must be a non-empty list")
    cleaned = []
    for position, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValidationError(f"item {position} must be an object")
        missing = [k for k in ("id", "name", "quantity", "price") if item.get(k) in (None, "")]
        if missing:
            raise ValidationError(f"item {position} is missing {', '.join(missing)}")
        quantity = item["quantity"]
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError(f"item {position} quantity must be a positive integer")
        try:
            price = Decimal(str(item["price"]))
        except InvalidOperation:
            raise ValidationError(f"item {position} price must be a number")
        if isinstance(item["price"], bool) or not price.is_finite() or price < 0:
            raise ValidationError(f"item {position} price must be a non-negative number")
        cleaned.append({
            "id": str(item["id"]),
            "name": str(item["name"]),
            "quantity": quantity,
            "price": item["price"] if isinstance(item["price"], (int, float)) else float(price),
        })
    return cleaned


def _optional_text(data, key):
    value = data.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value


def _check_status(status):
    if not isinstance(status, str) or status not in STATUS_VALUES:
        raise ValidationError(f"invalid status: {status}")


def _reconcile_total(claimed, computed):
    if claimed in (None, ""):
        return computed
    try:
        matches = Decimal(str(claimed)) == Decimal(computed)
    except InvalidOperation:
        matches = False
    if matches:
        return computed
    if current_app.config.get("TOTAL_MISMATCH_POLICY", "reject") == "correct":
        log.warning("correcting client total {} to {}", claimed, computed)
        return computed
    raise ValidationError(f"total {claimed} does not match items total {computed}")


def build_order(data):
    """Validate a creation payload and return the wire-shaped fields to store."""
    if not isinstance(data, dict):
        raise ValidationError("order body must be a JSON object")

    items = _validate_items(data.get("items"))

    status = data.get("status") or OrderStatus.PENDING.value
    _check_status(status)

    timestamp = data.get("timestamp")
    if timestamp:
        try:
            parse_timestamp(timestamp)
        except (TypeError, ValueError, AttributeError):
            raise ValidationError(f"invalid timestamp: {timestamp}")
    else:
        timestamp = utcnow().isoformat().replace("+00:00", "Z")

    payment_method = _optional_text(data, "paymentMethod")
    if payment_method is not None and payment_method not in PAYMENT_METHODS:
        raise ValidationError("paymentMethod must be card or cash")

    return {
        "id": _optional_text(data, "id") or new_order_id(),
        "items": items,
        "total": _reconcile_total(data.get("total"), compute_total(items)),
        "status": status,
        "timestamp": timestamp,
        "notation": _optional_text(data, "notation"),
        "customerName": _optional_text(data, "customerName"),
        "customerPhone": _optional_text(data, "customerPhone"),
        "paymentMethod": payment_method,
        "isDelivery": bool(data.get("isDelivery", False)),
    }


def create_order(data):
    order = store.insert(build_order(data))
    log.info("created order {} total={} delivery={}", order.id, order.total, order.is_delivery)
    return order


def change_status(order_id, status):
    """Move an order to ``status`` if the lifecycle allows it.

    Re-sending the current status is accepted and leaves the order untouched.
    """
    _check_status(status)
    order = store.get(order_id)
    if order.status == status:
        return order
    allow_skip = current_app.config.get("ALLOW_SKIP_PREPARING", True)
    if not can_transition(order.status, status, allow_skip):
        raise InvalidTransition(f"cannot move order {order_id} from {order.status} to {status}")
    order = store.update_status(order_id, status)
    log.info("order {} is now {}", order_id, status)
    return order


def cancel_order(order_id):
    snapshot = store.delete(order_id)
    log.info("cancelled order {}", order_id)
    return snapshot


def _bound(value, end=False):
    """A ``start``/``end`` query value: a bare date covers the whole UTC day."""
    if len(value) == 10:
        try:
            day = date.fromisoformat(value)
        except ValueError:
            raise ValidationError(f"invalid date: {value}")
        return day_range(day)[1 if end else 0]
    try:
        return parse_timestamp(value)
    except ValueError:
        raise ValidationError(f"invalid date: {value}")


def resolve_range(args):
    """Turn ``range`` or ``start``/``end`` query args into UTC bounds."""
    preset = args.get("range")
    if preset:
        try:
            return preset_range(preset)
        except ValueError as exc:
            raise ValidationError(str(exc))
    start = args.get("start")
    end = args.get("end")
    return (
        _bound(start) if start else None,
        _bound(end, end=True) if end else None,
    )


def build_board(args=None):
    """Bucketed orders for the kitchen screens, archived ones date-filtered."""
    start, end = resolve_range(args or {})
    now = utcnow()
    orders = []
    for order in store.find():
        data = order.to_dict()
        data["elapsedMinutes"] = elapsed_minutes(data["timestamp"], now)
        orders.append(data)
    board = bucket_orders(orders)
    board[ViewBucket.ARCHIVED] = date_range_filter(orders, start, end)
    return {bucket.value: entries for bucket, entries in board.items()}
