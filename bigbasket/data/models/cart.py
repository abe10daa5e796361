#bigbasket/data/models/cart.py
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from bigbasket.data.database import Base


class CartModel(Base):
    __tablename__ = "carts"

    id = Column(Integer, primary_key=True)
    customer_id = Column(Integer, nullable=False, index=True)

    status = Column(String, nullable=False, default="ACTIVE")  # ACTIVE, BILLED, EXPIRED
    expires_at = Column(DateTime(timezone=True), nullable=False)

    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItemModel.id",
    )
