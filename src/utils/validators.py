from typing import List

# card data is only checked for presence, never stored or verified
CHECKOUT_FIELDS = ("Name", "Address", "Card Number", "CVV")


def validate_checkout_form(
    name: str, address: str, card_number: str, cvv: str
) -> List[str]:
    """Return the labels of the checkout fields left blank, in form order."""
    values = (name, address, card_number, cvv)
    return [
        label
        for label, value in zip(CHECKOUT_FIELDS, values)
        if not (value or "").strip()
    ]
