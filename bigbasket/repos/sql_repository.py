# bigbasket/repos/sql_repository.py
import uuid
from datetime import datetime, timezone, timedelta
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from tenacity import retry, stop_after_attempt, retry_if_exception_type

from bigbasket.data.models import CartModel, CartItemModel, OrderModel, OrderItemModel, ProductModel
from bigbasket.domain.billing import compute_bill
from bigbasket.domain.errors import (
    CartNotFound,
    CheckoutInProgress,
    DuplicateProduct,
    EmptyCart,
    InvalidQuantity,
    OutOfStock,
    ProductNotFound,
)
from bigbasket.domain.schemas import Cart, Order, Product, ProductForCustomer, ProductIn
from bigbasket.repos.base import Repository
from bigbasket.services.lock_service import LockService
from bigbasket.services.notification_service import NotificationService
from bigbasket.utils.settings import CART_TTL_SECONDS, CHECKOUT_LOCK_TTL_SECONDS
from bigbasket.utils.logging import get_logger

logger = get_logger(__name__)


class SqlRepository(Repository):
    """
    Repozytorium na SQLAlchemy, jedna sesja na request.

    Zapisy koncza sie commitem; przy bledzie rollback i wyjatek leci dalej.
    Rachunek klienta jest serializowany lockiem w Redis.
    """

    def __init__(self, db: Session, lock_service: LockService, notification_service: NotificationService):
        self.db = db
        self.lock_service = lock_service
        self.notification_service = notification_service

    # =====================================================
    # ADMIN
    # =====================================================
    def get_all_products_by_admin(self) -> List[Product]:
        rows = self.db.execute(select(ProductModel).order_by(ProductModel.id)).scalars().all()
        return [Product.model_validate(p) for p in rows]

    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        product = self.db.get(ProductModel, product_id)
        return Product.model_validate(product) if product else None

    def refill_stock(self, product_id: int, quantity: int) -> Optional[Product]:
        if quantity <= 0:
            raise InvalidQuantity(quantity)

        try:
            product = self.db.get(ProductModel, product_id, with_for_update=True)
            if not product:
                return None

            product.stock_quantity += quantity
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(product)
        logger.info(f"Product {product_id} restocked to {product.stock_quantity}")
        return Product.model_validate(product)

    def post_new_product(self, product: ProductIn) -> Product:
        if product.id is not None:
            created = self._insert_product(product, product.id)
        else:
            created = self._insert_with_next_id(product)

        logger.info(f"Product {created.id} added to catalog")
        return Product.model_validate(created)

    # id = max + 1; sekwencja SERIAL nie widzi jawnych id z payloadu
    @retry(reraise=True, stop=stop_after_attempt(3), retry=retry_if_exception_type(DuplicateProduct))
    def _insert_with_next_id(self, product: ProductIn) -> ProductModel:
        next_id = (self.db.execute(select(func.max(ProductModel.id))).scalar() or 0) + 1
        return self._insert_product(product, next_id)

    def _insert_product(self, product: ProductIn, product_id: int) -> ProductModel:
        try:
            if self.db.get(ProductModel, product_id):
                raise DuplicateProduct(product_id)

            created = ProductModel(**product.model_dump(exclude={"id"}), id=product_id)
            self.db.add(created)
            self.db.commit()
        except IntegrityError as e:
            # rownolegly insert tego samego id miedzy sprawdzeniem a commitem
            self.db.rollback()
            raise DuplicateProduct(product_id) from e
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(created)
        return created

    # =====================================================
    # CUSTOMER
    # =====================================================
    def get_all_products_by_customer(self) -> List[ProductForCustomer]:
        rows = self.db.execute(select(ProductModel).order_by(ProductModel.id)).scalars().all()
        return [ProductForCustomer.model_validate(p) for p in rows]

    def add_to_cart(self, customer_id: int, product_id: int, quantity: int) -> Cart:
        """
        Use Case: Dodanie produktu do koszyka (Command).

        Walidacja:
        - quantity > 0
        - produkt istnieje w katalogu
        - laczna ilosc w koszyku nie przekracza stanu magazynu

        Brak aktywnego koszyka -> tworzony nowy. Kazde dodanie przedluza waznosc.
        """
        if quantity <= 0:
            raise InvalidQuantity(quantity)

        try:
            product = self.db.get(ProductModel, product_id)
            if not product:
                raise ProductNotFound(product_id)

            cart = self._get_active_cart(customer_id)
            if not cart:
                cart = CartModel(customer_id=customer_id, status="ACTIVE")
                self.db.add(cart)

            existing_item = next((i for i in cart.items if i.product_id == product_id), None)
            requested = quantity + (existing_item.quantity if existing_item else 0)
            if requested > product.stock_quantity:
                raise OutOfStock(product_id, requested, product.stock_quantity)

            if existing_item:
                existing_item.quantity = requested
            else:
                cart.items.append(CartItemModel(product_id=product_id, quantity=quantity))

            cart.expires_at = datetime.now(timezone.utc) + timedelta(seconds=CART_TTL_SECONDS)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(cart)
        return Cart.model_validate(cart)

    def get_all_products_from_cart(self, customer_id: Optional[int] = None) -> List[Cart]:
        query = select(CartModel).order_by(CartModel.id)
        if customer_id is not None:
            query = query.where(CartModel.customer_id == customer_id)

        carts = self.db.execute(query).scalars().all()
        return [Cart.model_validate(c) for c in carts]

    def generate_bill(self, customer_id: int) -> Order:
        """
        Use Case: Wystawienie rachunku (Command).

        1. Blokuje checkout klienta (Redis)
        2. Liczy rachunek z aktywnego koszyka
        3. Zdejmuje towar ze stanu, koszyk -> BILLED
        4. Zapisuje zamówienie i wysyła powiadomienie (async)
        """
        token = uuid.uuid4().hex
        if not self.lock_service.acquire_checkout_lock(customer_id, token, CHECKOUT_LOCK_TTL_SECONDS):
            raise CheckoutInProgress(customer_id)

        try:
            order = self._bill_active_cart(customer_id)
        finally:
            self.lock_service.release_checkout_lock(customer_id, token)

        logger.info(f"Order {order.id} created from cart {order.cart_id}, total {order.total}")

        # zamowienie jest juz zapisane, awaria brokera nie moze go cofnac
        try:
            self.notification_service.send_bill_notification(customer_id, order.id)
        except Exception as e:
            logger.warning(f"Failed to enqueue bill notification for order {order.id}: {e}")

        return order

    def _bill_active_cart(self, customer_id: int) -> Order:
        try:
            cart = self._get_active_cart(customer_id)
            if not cart:
                raise CartNotFound(customer_id)
            if not cart.items:
                raise EmptyCart(customer_id)

            products = {}
            for item in cart.items:
                product = self.db.get(ProductModel, item.product_id, with_for_update=True)
                if not product:
                    raise ProductNotFound(item.product_id)
                if item.quantity > product.stock_quantity:
                    raise OutOfStock(item.product_id, item.quantity, product.stock_quantity)
                products[item.product_id] = product

            bill = compute_bill(
                customer_id,
                cart.id,
                [(Product.model_validate(products[i.product_id]), i.quantity) for i in cart.items],
            )

            for item in cart.items:
                products[item.product_id].stock_quantity -= item.quantity
            cart.status = "BILLED"

            created = OrderModel(
                cart_id=cart.id,
                customer_id=customer_id,
                status=bill.status,
                subtotal=bill.subtotal,
                discount_total=bill.discount_total,
                gst_total=bill.gst_total,
                total=bill.total,
                items=[OrderItemModel(**line.model_dump()) for line in bill.items],
            )
            self.db.add(created)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(created)
        return Order.model_validate(created)

    def _get_active_cart(self, customer_id: int) -> Optional[CartModel]:
        """Aktywny koszyk po terminie traktowany jest jak wygasly, nawet przed przebiegiem beat."""
        return self.db.execute(
            select(CartModel).where(
                CartModel.customer_id == customer_id,
                CartModel.status == "ACTIVE",
                CartModel.expires_at > datetime.now(timezone.utc),
            )
        ).scalars().first()
