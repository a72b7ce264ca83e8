# Order service module for business logic
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from marketplace import db
from marketplace.errors import InternalError, NotFound
from marketplace.models import Order, OrderType, Product, User
from marketplace.utils.validation import MAX_INTEGER

logger = logging.getLogger(__name__)


def normalize_quantity(quantity):
    """Positive integers pass through; anything else becomes 1."""
    if quantity is None or isinstance(quantity, bool):
        return 1
    if isinstance(quantity, float) and not quantity.is_integer():
        return 1
    try:
        qty = int(quantity)
    except (TypeError, ValueError, OverflowError):
        return 1
    return qty if 0 < qty <= MAX_INTEGER else 1


def resolve_parties(direction, acting_user_id, product):
    """Return ``(buyer_id, seller_id)`` for an order in ``direction``.

    A buy order is placed by the buyer against the product's seller. A sell
    order is placed by the seller and names the product's registered seller
    as the counterparty.
    """
    if direction == OrderType.BUY:
        return acting_user_id, product.seller_id
    return product.seller_id, acting_user_id


def create_order(acting_user_id, product_id, quantity, direction):
    direction = OrderType(direction)

    if db.session.get(User, acting_user_id) is None:
        raise NotFound('User not found')

    product = db.session.get(Product, product_id)
    if product is None:
        raise NotFound('Product not found')

    qty = normalize_quantity(quantity)
    total_price = product.price * qty
    buyer_id, seller_id = resolve_parties(direction, acting_user_id, product)

    order = Order(
        type=direction,
        buyer_id=buyer_id,
        seller_id=seller_id,
        product_id=product.id,
        quantity=qty,
        total_price=total_price
    )
    try:
        db.session.add(order)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to create {direction.value} order for user {acting_user_id}: {str(e)}")
        raise InternalError()

    logger.info(f"Created {direction.value} order {order.id}: product {product.id} x{qty}, total {total_price}")
    return order


def _list_orders(**filters):
    try:
        query = Order.query.options(joinedload(Order.product))
        if filters:
            query = query.filter_by(**filters)
        return query.order_by(Order.created_at.desc(), Order.id.desc()).all()
    except SQLAlchemyError as e:
        logger.error(f"Failed to load orders: {str(e)}")
        raise InternalError()


def list_buyer_orders(user_id):
    return _list_orders(buyer_id=user_id)


def list_seller_orders(user_id):
    return _list_orders(seller_id=user_id)


def list_all_orders():
    return _list_orders()
