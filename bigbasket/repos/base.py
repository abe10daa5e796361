# bigbasket/repos/base.py
from abc import ABC, abstractmethod
from typing import List, Optional

from bigbasket.domain.schemas import Cart, Order, Product, ProductForCustomer, ProductIn


class Repository(ABC):
    """
    Kontrakt dostepu do danych dla kontrolerow admina i klienta.

    Kontrolery nie znaja technologii przechowywania: dostaja implementacje
    (SQL w produkcji, pamiec w testach) przez zaleznosc FastAPI.
    Bledy domenowe sa z `bigbasket.domain.errors`; bledy infrastruktury
    (baza, Redis) propaguja sie bez zmian.
    """

    # =====================================================
    # ADMIN
    # =====================================================
    @abstractmethod
    def get_all_products_by_admin(self) -> List[Product]:
        ...

    @abstractmethod
    def get_product_by_id(self, product_id: int) -> Optional[Product]:
        """Zwraca None dla nieznanego id."""

    @abstractmethod
    def refill_stock(self, product_id: int, quantity: int) -> Optional[Product]:
        """Dodaje `quantity` do stanu magazynu. None dla nieznanego id."""

    @abstractmethod
    def post_new_product(self, product: ProductIn) -> Product:
        """Zapisuje nowy produkt; id nadaje store, chyba ze przyszlo w payloadzie."""

    # =====================================================
    # CUSTOMER
    # =====================================================
    @abstractmethod
    def get_all_products_by_customer(self) -> List[ProductForCustomer]:
        ...

    @abstractmethod
    def add_to_cart(self, customer_id: int, product_id: int, quantity: int) -> Cart:
        """Dodaje pozycje do aktywnego koszyka; istniejaca pozycja sumuje ilosc."""

    @abstractmethod
    def get_all_products_from_cart(self, customer_id: Optional[int] = None) -> List[Cart]:
        ...

    @abstractmethod
    def generate_bill(self, customer_id: int) -> Order:
        """Wystawia rachunek z aktywnego koszyka i zamyka koszyk (BILLED)."""
