#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from bigbasket.data.models.product import ProductModel
from bigbasket.data.models.cart import CartModel
from bigbasket.data.models.cart_item import CartItemModel
from bigbasket.data.models.order import OrderModel
from bigbasket.data.models.order_item import OrderItemModel

__all__ = ["ProductModel", "CartModel", "CartItemModel", "OrderModel", "OrderItemModel"]
