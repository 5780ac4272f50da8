
from flask import Blueprint, current_app, render_template, request, redirect, url_for, flash
from .. import orders
from ..errors import OrderboardError
from ..lifecycle import PRESET_RANGES, allowed_next_statuses
from ..menu import MENU, items_from_form

kitchen_bp = Blueprint('kitchen', __name__)


def _board_context():
    allow_skip = current_app.config.get("ALLOW_SKIP_PREPARING", True)
    try:
        board = orders.build_board(request.args)
    except OrderboardError as e:
        flash(e.message)
        board = orders.build_board()
    return dict(
        board=board,
        next_statuses=lambda status: allowed_next_statuses(status, allow_skip),
        presets=PRESET_RANGES,
        range_args=request.args,
        poll_interval=current_app.config.get("POLL_INTERVAL_SECONDS", 5),
    )


def _back():
    return redirect(url_for('kitchen.kitchen', **request.args))


@kitchen_bp.route('/kitchen', methods=['GET'])
def kitchen():
    return render_template('kitchen.html', menu=MENU, **_board_context())


@kitchen_bp.route('/kitchen/board', methods=['GET'])
def board():
    # Fragment swapped in by the polling script
    return render_template('_board.html', **_board_context())


@kitchen_bp.route('/kitchen/orders', methods=['POST'])
def create():
    data = {
        "items": items_from_form(request.form),
        "notation": request.form.get('notation'),
    }
    if not data["items"]:
        flash('Please add items to the order.')
        return _back()
    try:
        order = orders.create_order(data)
    except OrderboardError as e:
        flash(f'Could not create the order: {e.message}')
    else:
        flash(f'Order {order.id} created!')
    return _back()


@kitchen_bp.route('/kitchen/orders/<string:order_id>/status', methods=['POST'])
def update(order_id):
    new_status = request.form.get('status', '')
    try:
        orders.change_status(order_id, new_status)
    except OrderboardError as e:
        flash(f'Could not update the order: {e.message}')
    else:
        flash(f'Order {order_id} is now {new_status}.')
    return _back()


@kitchen_bp.route('/kitchen/orders/<string:order_id>/cancel', methods=['POST'])
def cancel(order_id):
    try:
        orders.cancel_order(order_id)
    except OrderboardError as e:
        flash(f'Could not cancel the order: {e.message}')
    else:
        flash(f'Order {order_id} cancelled.')
    return _back()
