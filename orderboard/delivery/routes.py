
from flask import Blueprint, abort, current_app, render_template, request, redirect, url_for, flash
from .. import orders, store
from ..errors import NotFound, OrderboardError
from ..menu import MENU, items_from_form

delivery_bp = Blueprint('delivery', __name__)


def _order_or_404():
    order_id = request.args.get('orderId')
    if not order_id:
        abort(404)
    try:
        return store.get(order_id)
    except NotFound:
        abort(404)


@delivery_bp.route('/delivery', methods=['GET', 'POST'])
def delivery():
    form = request.form if request.method == 'POST' else {}
    if request.method == 'POST':
        items = items_from_form(request.form)
        customer_name = request.form.get('customer_name', '').strip()
        customer_phone = request.form.get('customer_phone', '').strip()
        payment_method = request.form.get('payment_method')
        if not items:
            flash('Please add items to the order.')
        elif not customer_name or not customer_phone or not payment_method:
            flash('Please fill in name, phone and payment method.')
        else:
            try:
                order = orders.create_order({
                    "items": items,
                    "notation": request.form.get('notation'),
                    "customerName": customer_name,
                    "customerPhone": customer_phone,
                    "paymentMethod": payment_method,
                    "isDelivery": True,
                })
            except OrderboardError as e:
                flash(f'Could not create the order: {e.message}')
            else:
                target = 'delivery.card' if order.payment_method == 'card' else 'delivery.cash'
                return redirect(url_for(target, orderId=order.id))
    return render_template('delivery.html', menu=MENU, form=form)


@delivery_bp.route('/delivery/card', methods=['GET'])
def card():
    order = _order_or_404()
    return render_template(
        'card.html',
        order=order,
        publishable_key=current_app.config.get("STRIPE_PUBLISHABLE_KEY"),
    )


@delivery_bp.route('/delivery/cash', methods=['GET'])
def cash():
    return render_template('cash.html', order=_order_or_404())
