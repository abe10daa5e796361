# bigbasket/data/seed.py
from decimal import Decimal

from bigbasket.data.database import SessionLocal
from bigbasket.data.models import ProductModel
from bigbasket.utils.logging import get_logger

logger = get_logger(__name__)

CATALOG = [
    {"name": "Basmati Rice 5kg", "price": Decimal("649.00"), "stock_quantity": 120,
     "discount_percentage": Decimal("5"), "gst_percentage": Decimal("5")},
    {"name": "Toor Dal 1kg", "price": Decimal("165.00"), "stock_quantity": 200,
     "discount_percentage": Decimal("0"), "gst_percentage": Decimal("5")},
    {"name": "Sunflower Oil 1L", "price": Decimal("189.50"), "stock_quantity": 80,
     "discount_percentage": Decimal("10"), "gst_percentage": Decimal("5")},
    {"name": "Green Tea 100 bags", "price": Decimal("399.00"), "stock_quantity": 40,
     "discount_percentage": Decimal("15"), "gst_percentage": Decimal("18")},
]


def seed(session_factory=SessionLocal):
    db = session_factory()
    try:
        # nie nadpisuje: seed tylko gdy katalog jest pusty
        if db.query(ProductModel).first():
            return 0
        db.add_all(ProductModel(**p) for p in CATALOG)
        db.commit()
        logger.info(f"Seeded {len(CATALOG)} products")
        return len(CATALOG)
    finally:
        db.close()
