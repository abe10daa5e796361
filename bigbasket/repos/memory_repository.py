# bigbasket/repos/memory_repository.py
import threading
from datetime import datetime, timezone, timedelta
from typing import Dict, Iterable, List, Optional

from bigbasket.domain.billing import compute_bill
from bigbasket.domain.errors import (
    CartNotFound,
    DuplicateProduct,
    EmptyCart,
    InvalidQuantity,
    OutOfStock,
    ProductNotFound,
)
from bigbasket.domain.schemas import Cart, CartItem, Order, Product, ProductForCustomer, ProductIn
from bigbasket.repos.base import Repository
from bigbasket.utils.settings import CART_TTL_SECONDS
from bigbasket.utils.logging import get_logger

logger = get_logger(__name__)


class InMemoryRepository(Repository):
    """
    Repozytorium trzymajace wszystko w slownikach.
    Ta sama semantyka co SqlRepository; uzywane w testach i lokalnie.
    """

    def __init__(self, products: Iterable[Product] = (), cart_ttl_seconds: int = CART_TTL_SECONDS):
        self._lock = threading.Lock()
        self._products: Dict[int, Product] = {p.id: p.model_copy() for p in products}
        self._carts: Dict[int, Cart] = {}
        self._orders: Dict[int, Order] = {}
        self._cart_ttl = timedelta(seconds=cart_ttl_seconds)

    # =====================================================
    # ADMIN
    # =====================================================
    def get_all_products_by_admin(self) -> List[Product]:
        with self._lock:
            return [p.model_copy() for p in self._sorted_products()]

    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        with self._lock:
            product = self._products.get(product_id)
            return product.model_copy() if product else None

    def refill_stock(self, product_id: int, quantity: int) -> Optional[Product]:
        if quantity <= 0:
            raise InvalidQuantity(quantity)

        with self._lock:
            product = self._products.get(product_id)
            if not product:
                return None
            product.stock_quantity += quantity
            logger.info(f"Product {product_id} restocked to {product.stock_quantity}")
            return product.model_copy()

    def post_new_product(self, product: ProductIn) -> Product:
        with self._lock:
            product_id = product.id
            if product_id is None:
                product_id = max(self._products, default=0) + 1
            elif product_id in self._products:
                raise DuplicateProduct(product_id)

            created = Product(**product.model_dump(exclude={"id"}), id=product_id)
            self._products[product_id] = created
            return created.model_copy()

    # =====================================================
    # CUSTOMER
    # =====================================================
    def get_all_products_by_customer(self) -> List[ProductForCustomer]:
        with self._lock:
            return [ProductForCustomer.model_validate(p) for p in self._sorted_products()]

    def add_to_cart(self, customer_id: int, product_id: int, quantity: int) -> Cart:
        if quantity <= 0:
            raise InvalidQuantity(quantity)

        with self._lock:
            product = self._products.get(product_id)
            if not product:
                raise ProductNotFound(product_id)

            cart = self._active_cart(customer_id)
            if not cart:
                cart = Cart(id=max(self._carts, default=0) + 1, customer_id=customer_id)

            item = next((i for i in cart.items if i.product_id == product_id), None)
            requested = quantity + (item.quantity if item else 0)
            if requested > product.stock_quantity:
                raise OutOfStock(product_id, requested, product.stock_quantity)

            if item:
                item.quantity = requested
            else:
                cart.items.append(CartItem(product_id=product_id, quantity=quantity))

            cart.expires_at = datetime.now(timezone.utc) + self._cart_ttl
            self._carts[cart.id] = cart
            return cart.model_copy(deep=True)

    def get_all_products_from_cart(self, customer_id: Optional[int] = None) -> List[Cart]:
        with self._lock:
            return [
                c.model_copy(deep=True)
                for c in self._carts.values()
                if customer_id is None or c.customer_id == customer_id
            ]

    def generate_bill(self, customer_id: int) -> Order:
        with self._lock:
            cart = self._active_cart(customer_id)
            if not cart:
                raise CartNotFound(customer_id)
            if not cart.items:
                raise EmptyCart(customer_id)

            lines = []
            for item in cart.items:
                product = self._products.get(item.product_id)
                if not product:
                    raise ProductNotFound(item.product_id)
                if item.quantity > product.stock_quantity:
                    raise OutOfStock(item.product_id, item.quantity, product.stock_quantity)
                lines.append((product, item.quantity))

            order = compute_bill(customer_id, cart.id, lines)

            for product, quantity in lines:
                product.stock_quantity -= quantity
            cart.status = "BILLED"

            order.id = max(self._orders, default=0) + 1
            order.created_at = datetime.now(timezone.utc)
            self._orders[order.id] = order

            logger.info(f"Order {order.id} billed from cart {cart.id}, total {order.total}")
            return order.model_copy(deep=True)

    def _sorted_products(self) -> List[Product]:
        return sorted(self._products.values(), key=lambda p: p.id)

    def _active_cart(self, customer_id: int) -> Optional[Cart]:
        now = datetime.now(timezone.utc)
        return next(
            (
                c for c in self._carts.values()
                if c.customer_id == customer_id
                and c.status == "ACTIVE"
                and (c.expires_at is None or c.expires_at > now)
            ),
            None,
        )
