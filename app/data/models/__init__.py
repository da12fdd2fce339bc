#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from app.data.models.user import UserModel
from app.data.models.menu_item import MenuItemModel
from app.data.models.table import TableModel
from app.data.models.event_hall import EventHallModel
from app.data.models.offer import OfferModel
from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.data.models.order import OrderModel
from app.data.models.order_item import OrderItemModel

__all__ = [
    "UserModel",
    "MenuItemModel",
    "TableModel",
    "EventHallModel",
    "OfferModel",
    "CartModel",
    "CartItemModel",
    "OrderModel",
    "OrderItemModel",
]
