# Category service module for business logic
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from marketplace import db
from marketplace.errors import Conflict, InternalError
from marketplace.models import Category
from marketplace.utils.validation import require_strings

logger = logging.getLogger(__name__)


def get_all_categories():
    try:
        return Category.query.order_by(Category.id).all()
    except SQLAlchemyError as e:
        logger.error(f"Failed to load categories: {str(e)}")
        raise InternalError()


def create_category(data):
    require_strings(data, 'name', 'slug')
    if Category.query.filter_by(slug=data['slug']).first():
        raise Conflict(f"Category with slug '{data['slug']}' already exists")

    category = Category(name=data['name'], slug=data['slug'])
    try:
        db.session.add(category)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict(f"Category with slug '{data['slug']}' already exists")
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to create category: {str(e)}")
        raise InternalError()

    logger.info(f"Created category {category.id} ({category.slug})")
    return category
