"""Order store: the only module that talks to the database session."""
from sqlalchemy.exc import SQLAlchemyError

from . import db
from .errors import NotFound, StoreError
from .logging import get_logger
from .models import Order

log = get_logger(__name__)

# Query-string filters that map onto a column; everything else matches nothing.
FILTERABLE = {key for key in Order.FIELDS if key != "items"}

_TRUE = {"1", "true", "yes", "on"}


def _coerce(key, value):
    if key == "isDelivery" and isinstance(value, str):
        return value.strip().lower() in _TRUE
    return value


def _fail(action, exc):
    db.session.rollback()
    log.error("store {} failed: {}", action, exc)
    return StoreError(str(exc))


def find(filters=None):
    """Orders matching every exact key/value pair in ``filters``, oldest first."""
    filters = filters or {}
    if any(key not in FILTERABLE for key in filters):
        return []
    query = Order.query
    for key, value in filters.items():
        column = getattr(Order, Order.FIELDS[key])
        query = query.filter(column == _coerce(key, value))
    try:
        return query.order_by(Order.timestamp.asc()).all()
    except SQLAlchemyError as exc:
        raise _fail("find", exc) from exc


def get(order_id):
    try:
        order = db.session.get(Order, order_id)
    except SQLAlchemyError as exc:
        raise _fail("get", exc) from exc
    if order is None:
        raise NotFound(f"order {order_id} not found")
    return order


def insert(fields):
    """Persist a new order from already validated wire-shaped ``fields``."""
    order = Order(**{Order.FIELDS[key]: value for key, value in fields.items()})
    try:
        db.session.add(order)
        db.session.commit()
    except SQLAlchemyError as exc:
        raise _fail("insert", exc) from exc
    return order


def update_status(order_id, status):
    order = get(order_id)
    order.status = status
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        raise _fail("update", exc) from exc
    return order


def delete(order_id):
    """Remove an order and return its last state as a dict."""
    order = get(order_id)
    snapshot = order.to_dict()
    try:
        db.session.delete(order)
        db.session.commit()
    except SQLAlchemyError as exc:
        raise _fail("delete", exc) from exc
    return snapshot
