
MENU = [
    {"id": "k1", "name": "Chicken Kebab", "price": 5.50,
     "description": "Chicken kebab with fresh vegetables"},
    {"id": "k2", "name": "Beef Kebab", "price": 6.00,
     "description": "Beef kebab with house sauce"},
    {"id": "k3", "name": "Falafel", "price": 5.00,
     "description": "Spiced chickpea croquettes"},
    {"id": "d1", "name": "Chicken Durum", "price": 6.50,
     "description": "Chicken wrap with vegetables and sauces"},
    {"id": "d2", "name": "Beef Durum", "price": 7.00,
     "description": "Beef wrap with vegetables and sauces"},
    {"id": "s1", "name": "Kebab Salad", "price": 4.50,
     "description": "Fresh salad topped with kebab"},
    {"id": "b1", "name": "Drink", "price": 1.50,
     "description": "Soft drink of your choice"},
]

MENU_BY_ID = {item["id"]: item for item in MENU}


def items_from_form(form):
    """Build order items from ``qty-<menu id>`` form fields, in menu order.

    Blank, zero and unparseable quantities are skipped.
    """
    items = []
    for entry in MENU:
        raw = form.get(f"qty-{entry['id']}", "").strip()
        try:
            quantity = int(raw)
        except ValueError:
            continue
        if quantity > 0:
            items.append({
                "id": entry["id"],
                "name": entry["name"],
                "quantity": quantity,
                "price": entry["price"],
            })
    return items
