# bigbasket/domain/errors.py


class BigBasketError(Exception):
    """Bazowy wyjatek domenowy."""


class ProductNotFound(BigBasketError, LookupError):
    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class CartNotFound(BigBasketError, LookupError):
    def __init__(self, customer_id: int):
        super().__init__(f"No active cart for customer {customer_id}")
        self.customer_id = customer_id


class InvalidQuantity(BigBasketError, ValueError):
    def __init__(self, quantity: int):
        super().__init__(f"Quantity must be greater than 0, got {quantity}")
        self.quantity = quantity


class OutOfStock(BigBasketError, ValueError):
    def __init__(self, product_id: int, requested: int, available: int):
        super().__init__(
            f"Product {product_id}: requested {requested}, only {available} in stock"
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class EmptyCart(BigBasketError, ValueError):
    def __init__(self, customer_id: int):
        super().__init__(f"Cart of customer {customer_id} is empty")
        self.customer_id = customer_id


class DuplicateProduct(BigBasketError):
    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} already exists")
        self.product_id = product_id


class CheckoutInProgress(BigBasketError):
    def __init__(self, customer_id: int):
        super().__init__(f"Checkout for customer {customer_id} is already in progress")
        self.customer_id = customer_id
