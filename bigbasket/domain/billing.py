# bigbasket/domain/billing.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Tuple

from bigbasket.domain.schemas import Order, OrderItem, Product

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def _money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def compute_bill(customer_id: int, cart_id: int | None, lines: Iterable[Tuple[Product, int]]) -> Order:
    """
    Liczy rachunek z pozycji koszyka.

    Dla kazdej pozycji: rabat od wartosci brutto, GST od kwoty po rabacie.
    Sumy zamowienia to sumy zaokraglonych wartosci pozycji.
    """
    items: List[OrderItem] = []
    subtotal = discount_total = gst_total = total = Decimal("0.00")

    for product, quantity in lines:
        gross = _money(product.price * quantity)
        discount = _money(gross * product.discount_percentage / HUNDRED)
        taxable = gross - discount
        gst = _money(taxable * product.gst_percentage / HUNDRED)
        line_total = taxable + gst

        items.append(
            OrderItem(
                product_id=product.id,
                name=product.name,
                quantity=quantity,
                unit_price=product.price,
                discount_percentage=product.discount_percentage,
                gst_percentage=product.gst_percentage,
                line_total=line_total,
            )
        )
        subtotal += gross
        discount_total += discount
        gst_total += gst
        total += line_total

    return Order(
        customer_id=customer_id,
        cart_id=cart_id,
        items=items,
        subtotal=subtotal,
        discount_total=discount_total,
        gst_total=gst_total,
        total=total,
    )
