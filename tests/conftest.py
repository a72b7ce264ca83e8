import pytest

from marketplace import create_app, db
from marketplace.config import Config
from marketplace.models import Category, Product, Role, User
from marketplace.services.auth_service import hash_password
from marketplace.utils import generate_token


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    JWT_SECRET_KEY = 'test-jwt-secret-key-that-is-long-enough'
    BCRYPT_LOG_ROUNDS = 4
    FRONTEND_URL = 'http://frontend.test'
    GOOGLE_CLIENT_ID = 'google-client-id'
    GOOGLE_CLIENT_SECRET = 'google-client-secret'
    GOOGLE_REDIRECT_URI = 'http://api.test/auth/oauth/google/callback'
    FACEBOOK_APP_ID = 'facebook-app-id'
    FACEBOOK_APP_SECRET = 'facebook-app-secret'
    FACEBOOK_REDIRECT_URI = 'http://api.test/auth/oauth/facebook/callback'
    INSTAGRAM_CLIENT_ID = 'instagram-client-id'
    INSTAGRAM_CLIENT_SECRET = 'instagram-client-secret'
    INSTAGRAM_REDIRECT_URI = 'http://api.test/auth/oauth/instagram/callback'


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    def _make_user(name, email, role, password='pw123456'):
        user = User(name=name, email=email, password_hash=hash_password(password), role=role)
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user


@pytest.fixture
def buyer(make_user):
    return make_user('Bob Buyer', 'buyer@example.com', Role.BUYER)


@pytest.fixture
def seller(make_user):
    return make_user('Sally Seller', 'seller@example.com', Role.SELLER)


@pytest.fixture
def admin(make_user):
    return make_user('Ada Admin', 'admin@example.com', Role.ADMIN)


@pytest.fixture
def auth_header(app):
    def _auth_header(user):
        return {'Authorization': f'Bearer {generate_token(user)}'}
    return _auth_header


@pytest.fixture
def category(app):
    category = Category(name='Tools', slug='tools')
    db.session.add(category)
    db.session.commit()
    return category


@pytest.fixture
def product(seller, category):
    product = Product(
        title='Widget',
        description='A very useful widget',
        price=9.5,
        seller_id=seller.id,
        category_id=category.id
    )
    db.session.add(product)
    db.session.commit()
    return product
