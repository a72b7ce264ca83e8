from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flask_bcrypt import Bcrypt
from flask_migrate import Migrate
from flask_restx import Api
from marketplace.config import Config

migrate = Migrate()
db = SQLAlchemy()
jwt = JWTManager()
bcrypt = Bcrypt()

API_SETTINGS = dict(
    title='Marketplace API',
    version='1.0',
    description='Buyers, sellers, products and orders',
    doc='/docs',
    ui_config={
        'displayOperationId': True,
        'docExpansion': 'none',
        'filter': True,
        'defaultModelsExpandDepth': 1,
        'defaultModelExpandDepth': 1
    },
    authorizations={
        'BearerAuth': {
            'type': 'apiKey',
            'in': 'header',
            'name': 'Authorization',
            'description': 'Enter your JWT token as "Bearer <token>"'
        }
    }
)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    bcrypt.init_app(app)

    # Enable CORS
    CORS(app, resources={r"/*": {"origins": app.config.get('CORS_ORIGINS', '*')}},
         supports_credentials=app.config.get('CORS_SUPPORTS_CREDENTIALS', True),
         allow_headers=app.config.get('CORS_ALLOW_HEADERS', ["Content-Type", "Authorization"]),
         methods=app.config.get('CORS_METHODS', ["GET", "POST", "PUT", "DELETE", "OPTIONS"]))

    # One Api per application so the factory can be called repeatedly
    api = Api(**API_SETTINGS)

    from .errors import register_error_handlers
    from .routes import register_namespaces
    register_error_handlers(api)
    register_namespaces(api)
    api.init_app(app)

    from .cli import register_commands
    register_commands(app)

    with app.app_context():
        from . import models  # noqa: F401
        db.create_all()  # Create all tables

    return app
