from sqlalchemy import Column, Integer, String, Numeric, CheckConstraint

from bigbasket.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)

    price = Column(Numeric(10, 2), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
    discount_percentage = Column(Numeric(5, 2), nullable=False, default=0)
    gst_percentage = Column(Numeric(5, 2), nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price"),
        CheckConstraint("stock_quantity >= 0", name="ck_product_stock"),
    )
