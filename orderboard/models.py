
from . import db


class Order(db.Model):
    __tablename__ = "orders"
    id = db.Column(db.String(64), primary_key=True)
    items = db.Column(db.JSON, nullable=False)
    total = db.Column(db.String(20), nullable=False)
    status = db.Column(db.String(20), default="pending", nullable=False)
    timestamp = db.Column(db.String(40), nullable=False)
    notation = db.Column(db.Text, nullable=True)
    customer_name = db.Column(db.String(120), nullable=True)
    customer_phone = db.Column(db.String(40), nullable=True)
    payment_method = db.Column(db.String(10), nullable=True)
    is_delivery = db.Column(db.Boolean, default=False, nullable=False)

    # wire key -> column attribute
    FIELDS = {
        "id": "id",
        "items": "items",
        "total": "total",
        "status": "status",
        "timestamp": "timestamp",
        "notation": "notation",
        "customerName": "customer_name",
        "customerPhone": "customer_phone",
        "paymentMethod": "payment_method",
        "isDelivery": "is_delivery",
    }

    def to_dict(self):
        return {key: getattr(self, attr) for key, attr in self.FIELDS.items()}
