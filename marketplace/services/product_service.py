# Product service module for business logic
import logging
import math

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from marketplace import db
from marketplace.errors import InternalError, ValidationError
from marketplace.models import Category, Product
from marketplace.utils.validation import parse_id, require_fields, require_strings

logger = logging.getLogger(__name__)


def parse_price(value):
    if isinstance(value, bool):
        raise ValidationError('Price must be a number')
    try:
        price = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError('Price must be a number')
    if not math.isfinite(price):
        raise ValidationError('Price must be a number')
    return price


def get_all_products():
    try:
        return Product.query.options(joinedload(Product.category)).order_by(Product.id).all()
    except SQLAlchemyError as e:
        logger.error(f"Failed to load products: {str(e)}")
        raise InternalError()


def create_product(data, seller_id):
    require_fields(data, 'title', 'description', 'price', 'categoryId')
    require_strings(data, 'title', 'description')
    price = parse_price(data['price'])
    category_id = parse_id(data['categoryId'], 'categoryId')
    if db.session.get(Category, category_id) is None:
        raise ValidationError('Category does not exist')

    product = Product(
        title=data['title'],
        description=data['description'],
        price=price,
        category_id=category_id,
        seller_id=seller_id
    )
    try:
        db.session.add(product)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to create product for seller {seller_id}: {str(e)}")
        raise InternalError()

    logger.info(f"Seller {seller_id} created product {product.id}")
    return product


def delete_product(product_id):
    """Hard delete; succeeds whether or not the product exists."""
    try:
        deleted = Product.query.filter_by(id=product_id).delete()
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to delete product {product_id}: {str(e)}")
        raise InternalError()
    logger.info(f"Deleted product {product_id} ({deleted} row(s))")
