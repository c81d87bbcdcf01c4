from models.transaction import Transaction


def make_tx(
    id="t1",
    type="expense",
    date="2024-06-05",
    amount=100.0,
    category="Groceries",
    notes="",
    recurring=False,
    frequency=None,
) -> Transaction:
    return Transaction(
        id=id, type=type, date=date, amount=amount, category=category,
        notes=notes, recurring=recurring,
        frequency=frequency or ("monthly" if recurring else None),
    )
