
from orderboard.models import Order


def test_index_redirects_to_kitchen(client):
    r = client.get('/')
    assert r.status_code == 302
    assert r.headers['Location'].endswith('/kitchen')


def test_kitchen_shows_orders_in_their_panels(client, make_order):
    make_order(id='ORD-active')
    make_order(id='ORD-ready')
    client.put('/api/orders', json={'id': 'ORD-ready', 'status': 'ready'})

    r = client.get('/kitchen')
    assert r.status_code == 200
    html = r.get_data(as_text=True)
    assert 'data-interval="5"' in html
    kitchen, rest = html.split('id="ready-for-delivery"', 1)
    assert 'ORD-active' in kitchen and 'ORD-ready' not in kitchen
    assert 'ORD-ready' in rest.split('id="archived"', 1)[0]


def test_ready_card_truncates_items(client, make_order):
    make_order(id='ORD-big', status='ready', items=[
        {'id': item_id, 'name': name, 'quantity': 1, 'price': 1.0}
        for item_id, name in (('a', 'Alpha'), ('b', 'Bravo'), ('c', 'Charlie'), ('d', 'Delta'))
    ])
    html = client.get('/kitchen/board').get_data(as_text=True)
    assert '1x Bravo' in html
    assert 'Charlie' not in html
    assert '... and 2 more' in html


def test_kitchen_board_fragment_honours_range(client, make_order):
    make_order(id='ORD-old', status='delivered', timestamp='2024-01-01T10:00:00Z')
    html = client.get('/kitchen/board').get_data(as_text=True)
    assert 'ORD-old' in html
    assert '<html' not in html
    html = client.get('/kitchen/board?range=today').get_data(as_text=True)
    assert 'ORD-old' not in html


def test_kitchen_create_order_from_menu(client, app):
    r = client.post('/kitchen/orders', data={'qty-k1': '2', 'qty-b1': '1', 'qty-k2': '', 'notation': 'no onion'},
                    follow_redirects=True)
    assert r.status_code == 200
    assert 'created!' in r.get_data(as_text=True)
    with app.app_context():
        order = Order.query.one()
        assert order.total == '12.50'
        assert [i['id'] for i in order.items] == ['k1', 'b1']
        assert order.notation == 'no onion'


def test_kitchen_create_without_items_flashes(client, app):
    r = client.post('/kitchen/orders', data={'qty-k1': '0'}, follow_redirects=True)
    assert 'Please add items' in r.get_data(as_text=True)
    with app.app_context():
        assert Order.query.count() == 0


def test_kitchen_status_and_cancel_forms(client, make_order, app):
    order = make_order()
    r = client.post(f"/kitchen/orders/{order['id']}/status", data={'status': 'preparing'}, follow_redirects=True)
    assert 'is now preparing' in r.get_data(as_text=True)

    r = client.post(f"/kitchen/orders/{order['id']}/status", data={'status': 'pending'}, follow_redirects=True)
    assert 'Could not update the order' in r.get_data(as_text=True)

    r = client.post(f"/kitchen/orders/{order['id']}/cancel", follow_redirects=True)
    assert 'cancelled' in r.get_data(as_text=True)
    with app.app_context():
        assert Order.query.count() == 0

    r = client.post(f"/kitchen/orders/{order['id']}/cancel", follow_redirects=True)
    assert 'Could not cancel the order' in r.get_data(as_text=True)


def test_disabled_buttons_follow_allowed_transitions(client, make_order):
    make_order(id='ORD-prep', status='preparing')
    html = client.get('/kitchen/board').get_data(as_text=True)
    assert 'data-status="preparing" disabled' in html
    assert 'data-status="ready" >' in html


def test_delivery_form_renders_menu(client):
    r = client.get('/delivery')
    assert r.status_code == 200
    html = r.get_data(as_text=True)
    assert 'qty-k1' in html
    assert 'payment_method' in html


def test_delivery_requires_customer_details(client, app):
    r = client.post('/delivery', data={'qty-k1': '1', 'customer_name': 'Sam'})
    assert r.status_code == 200
    html = r.get_data(as_text=True)
    assert 'Please fill in name, phone and payment method.' in html
    assert 'value="Sam"' in html
    with app.app_context():
        assert Order.query.count() == 0


def test_delivery_cash_flow(client, app):
    r = client.post('/delivery', data={
        'qty-d1': '1', 'qty-b1': '2',
        'customer_name': 'Sam', 'customer_phone': '600123456',
        'payment_method': 'cash', 'notation': 'ring twice',
    })
    assert r.status_code == 302
    assert '/delivery/cash?orderId=ORD-' in r.headers['Location']

    with app.app_context():
        order = Order.query.one()
        assert order.is_delivery is True
        assert order.payment_method == 'cash'
        assert order.total == '9.50'
        order_id = order.id

    html = client.get(f'/delivery/cash?orderId={order_id}').get_data(as_text=True)
    assert 'Thank you, Sam!' in html
    assert '9.50' in html


def test_delivery_card_flow(client):
    r = client.post('/delivery', data={
        'qty-k3': '1',
        'customer_name': 'Kim', 'customer_phone': '611222333',
        'payment_method': 'card',
    })
    assert r.status_code == 302
    location = r.headers['Location']
    assert '/delivery/card?orderId=' in location

    html = client.get(location).get_data(as_text=True)
    assert 'data-key="pk_test_123"' in html
    assert 'Pay 5.00' in html


def test_payment_pages_need_a_known_order(client):
    assert client.get('/delivery/card').status_code == 404
    assert client.get('/delivery/cash?orderId=ORD-missing').status_code == 404
