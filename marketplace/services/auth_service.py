# Auth service module for business logic
import logging
import re

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from marketplace import db, bcrypt
from marketplace.errors import Conflict, InternalError, Unauthenticated, ValidationError
from marketplace.models import Role, User
from marketplace.utils.validation import require_strings

logger = logging.getLogger(__name__)

EMAIL_REGEX = re.compile(r'^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$')


def resolve_signup_role(requested):
    # Only sellers may be requested; everything else signs up as a buyer.
    return Role.SELLER if requested == Role.SELLER.value else Role.BUYER


def hash_password(password):
    return bcrypt.generate_password_hash(password).decode('utf-8')


def validate_email(email):
    email = email.strip()
    if not EMAIL_REGEX.match(email):
        raise ValidationError('Invalid email format')
    return email


def save_user(user):
    if User.query.filter_by(email=user.email).first():
        raise Conflict('Email already registered')
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict('Email already registered')
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to save user {user.email}: {str(e)}")
        raise InternalError()
    return user


def register_user(data):
    require_strings(data, 'name', 'email', 'password')
    user = save_user(User(
        name=data['name'],
        email=validate_email(data['email']),
        password_hash=hash_password(data['password']),
        role=resolve_signup_role(data.get('role'))
    ))
    logger.info(f"Registered user {user.id} ({user.role.value})")
    return user


def check_credentials(user, password):
    if not user or not bcrypt.check_password_hash(user.password_hash, password):
        raise Unauthenticated('Invalid credentials')
    return user


def authenticate(data):
    require_strings(data, 'email', 'password')
    user = User.query.filter_by(email=data['email'].strip()).first()
    try:
        return check_credentials(user, data['password'])
    except Unauthenticated:
        logger.warning(f"Failed login for {data['email']}")
        raise


def authenticate_admin(data):
    require_strings(data, 'email', 'password')
    admin = User.query.filter_by(email=data['email'].strip(), role=Role.ADMIN).first()
    try:
        return check_credentials(admin, data['password'])
    except Unauthenticated:
        logger.warning(f"Failed admin login for {data['email']}")
        raise


def create_admin(name, email, password):
    """Insert an admin account; admins cannot sign up through the API."""
    admin = save_user(User(
        name=name,
        email=validate_email(email),
        password_hash=hash_password(password),
        role=Role.ADMIN
    ))
    logger.info(f"Created admin {admin.id}")
    return admin
