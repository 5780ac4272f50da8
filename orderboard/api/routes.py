
from flask import Blueprint, current_app, request, jsonify
from .. import orders, payments, store
from ..errors import OrderboardError, ValidationError
from ..logging import get_logger

api_bp = Blueprint('api', __name__)
log = get_logger(__name__)


@api_bp.errorhandler(OrderboardError)
def handle_error(error):
    if error.status_code >= 500:
        log.error("{} {} failed: {}", request.method, request.path, error.message)
    else:
        log.info("{} {} rejected ({}): {}", request.method, request.path, error.status_code, error.message)
    return jsonify(error.to_dict()), error.status_code


def _json_body():
    data = request.get_json(force=True, silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("request body must be a JSON object")
    return data


@api_bp.get('/orders')
def list_orders():
    found = [o.to_dict() for o in store.find(request.args.to_dict())]
    return jsonify({"message": "Orders retrieved", "data": found})


@api_bp.post('/orders')
def create_order():
    data = _json_body()
    order = orders.create_order(data)
    return jsonify({"message": "Order created", "data": order.to_dict()}), 201


@api_bp.put('/orders')
def update_order():
    data = _json_body()
    order_id = data.get('id')
    status = data.get('status')
    if not order_id or not status:
        raise ValidationError("id and status are required")
    if not isinstance(order_id, str):
        raise ValidationError("id must be a string")
    order = orders.change_status(order_id, status)
    return jsonify({"message": "Order updated", "data": order.to_dict()})


@api_bp.delete('/orders')
def delete_order():
    order_id = request.args.get('id')
    if not order_id:
        raise ValidationError("id is required to delete an order")
    deleted = orders.cancel_order(order_id)
    return jsonify({"message": "Order deleted", "data": deleted})


@api_bp.get('/board')
def board():
    return jsonify({"message": "Board retrieved", "data": orders.build_board(request.args)})


@api_bp.post('/payment-intent')
def payment_intent():
    data = _json_body()
    order_id = data.get('orderId')
    if order_id:
        if not isinstance(order_id, str):
            raise ValidationError("orderId must be a string")
        order = store.get(order_id)
        amount = payments.to_minor_units(order.total)
        if amount <= 0:
            raise ValidationError(f"order {order.id} has nothing to charge")
        metadata = {"order_id": order.id}
    else:
        amount = data.get('amount')
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValidationError("orderId or a positive integer amount is required")
        metadata = {}
    client_secret = payments.create_payment_intent(
        amount,
        currency=current_app.config.get("PAYMENT_CURRENCY", "eur"),
        metadata=metadata,
        api_key=current_app.config.get("STRIPE_SECRET_KEY"),
    )
    return jsonify({"clientSecret": client_secret})
