from decimal import Decimal

from bigbasket.domain.billing import compute_bill
from bigbasket.domain.schemas import Product


def product(product_id, price, discount="0", gst="0"):
    return Product(
        id=product_id,
        name=f"Product {product_id}",
        price=Decimal(price),
        stock_quantity=100,
        discount_percentage=Decimal(discount),
        gst_percentage=Decimal(gst),
    )


def test_discount_then_gst_on_discounted_amount():
    order = compute_bill(1, 3, [(product(1, "100.00", discount="10", gst="18"), 2)])

    [line] = order.items
    assert line.unit_price == Decimal("100.00")
    assert line.line_total == Decimal("212.40")
    assert order.subtotal == Decimal("200.00")
    assert order.discount_total == Decimal("20.00")
    assert order.gst_total == Decimal("32.40")
    assert order.total == Decimal("212.40")


def test_totals_are_sums_of_rounded_lines():
    order = compute_bill(
        1,
        3,
        [
            (product(1, "100.00", discount="10", gst="18"), 2),
            (product(2, "33.33", gst="5"), 3),
        ],
    )

    assert [line.line_total for line in order.items] == [Decimal("212.40"), Decimal("104.99")]
    assert order.gst_total == Decimal("37.40")
    assert order.total == Decimal("317.39")
    assert order.total == order.subtotal - order.discount_total + order.gst_total


def test_half_cent_rounds_up():
    # 0.05 * 10% = 0.005
    order = compute_bill(1, None, [(product(1, "0.05", discount="10"), 1)])

    assert order.discount_total == Decimal("0.01")
    assert order.total == Decimal("0.04")


def test_bill_keeps_customer_and_cart():
    order = compute_bill(7, 11, [])

    assert order.customer_id == 7
    assert order.cart_id == 11
    assert order.items == []
    assert order.total == Decimal("0.00")
