
from datetime import timedelta
from orderboard import create_app, orders
from orderboard.lifecycle import utcnow
from orderboard.menu import MENU_BY_ID


def line(item_id, quantity):
    item = MENU_BY_ID[item_id]
    return dict(id=item["id"], name=item["name"], quantity=quantity, price=item["price"])


now = utcnow()
samples = [
    dict(items=[line("k1", 2), line("b1", 1)], status="pending", minutes_ago=3),
    dict(items=[line("d2", 1)], status="preparing", minutes_ago=9, notation="No onion"),
    dict(items=[line("k3", 1), line("s1", 1), line("b1", 2)], status="ready", minutes_ago=15),
    dict(items=[line("d1", 1), line("b1", 1)], status="delivered", minutes_ago=60 * 26,
         customerName="Alex", customerPhone="600123456", paymentMethod="cash", isDelivery=True),
]

if __name__ == '__main__':
    app = create_app()
    with app.app_context():
        for n, sample in enumerate(samples):
            stamp = now - timedelta(minutes=sample.pop("minutes_ago"))
            sample["id"] = f"ORD-{int(stamp.timestamp() * 1000)}-{n}"
            sample["timestamp"] = stamp.isoformat().replace("+00:00", "Z")
            orders.create_order(sample)
        print("Seeded sample orders.")
