"""
License delivery email.

Builds the subject and plain-text body sent to a customer after a
successful purchase.
"""
from decimal import ROUND_HALF_UP, Decimal
from typing import Tuple

from customers.domain.customer import Customer
from licenses.domain.license import License

DEFAULT_PRODUCT_TITLE = "Auto-Focus+"
DEFAULT_SUPPORT_EMAIL = "help@auto-focus.app"

_PREFIX_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}

_BODY_TEMPLATE = """Hello {greeting_name},

Thank you for purchasing {product_title}! Your purchase has been processed successfully.

LICENSE DETAILS
License Key: {license_key}
Product: {product_title} ({product_name})
Amount Paid: {amount}

GETTING STARTED
1. Open the application on your Mac
2. Go to Settings → License
3. Enter your license key: {license_key}
4. Enjoy unlimited focus sessions!

NEED HELP?
If you have any questions, reply to this email or contact us at {support_email}

Thank you for choosing {product_title}!

Best regards,
The {product_title} Team"""


def format_price(amount_minor: int, currency: str) -> str:
    """
    Format an amount in minor units for display.

    Args:
        amount_minor: Amount in cents (or the currency's minor unit)
        currency: ISO currency code, any case

    Returns:
        Formatted amount, e.g. "$19.99", "149.00 NOK" or "5.00 CHF"
    """
    amount = (Decimal(amount_minor or 0) / Decimal(100)).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )
    code = (currency or "").upper()
    symbol = _PREFIX_SYMBOLS.get(code)
    if symbol:
        return f"{symbol}{amount}"
    return f"{amount} {code}".rstrip()


def render_license_email(
    customer: Customer,
    license: License,
    product_title: str = DEFAULT_PRODUCT_TITLE,
    support_email: str = DEFAULT_SUPPORT_EMAIL,
) -> Tuple[str, str]:
    """
    Render the license delivery email.

    Args:
        customer: License owner
        license: Newly issued license
        product_title: Product name shown to the customer
        support_email: Contact address for questions

    Returns:
        Tuple of (subject, body)
    """
    subject = f"{product_title} License Key"
    body = _BODY_TEMPLATE.format(
        greeting_name=customer.first_name or "there",
        product_title=product_title,
        license_key=license.key,
        product_name=license.product_name,
        amount=format_price(license.price_paid, license.currency),
        support_email=support_email,
    )
    return subject, body
