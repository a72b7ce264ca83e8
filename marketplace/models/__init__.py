from marketplace.models.user_model import Role, User
from marketplace.models.category_model import Category
from marketplace.models.product_model import Product
from marketplace.models.order_model import Order, OrderType

__all__ = ['Role', 'User', 'Category', 'Product', 'Order', 'OrderType']
