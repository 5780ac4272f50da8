
import pytest
from orderboard import create_app, db


@pytest.fixture()
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path}/test.db",  # use sqlite for tests
        'STRIPE_SECRET_KEY': 'sk_test_123',
        'STRIPE_PUBLISHABLE_KEY': 'pk_test_123',
        'ALLOW_SKIP_PREPARING': True,
        'TOTAL_MISMATCH_POLICY': 'reject',
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def make_order(client):
    """POST an order and return its stored representation."""
    def _make(**overrides):
        body = {
            'items': [
                {'id': 'k1', 'name': 'Chicken Kebab', 'quantity': 2, 'price': 5.50},
                {'id': 'b1', 'name': 'Drink', 'quantity': 1, 'price': 1.50},
            ],
        }
        body.update(overrides)
        r = client.post('/api/orders', json=body)
        assert r.status_code == 201, r.get_json()
        return r.get_json()['data']
    return _make
