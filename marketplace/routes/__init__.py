from .auth_routes import auth_ns
from .category_routes import category_ns
from .health_routes import health_ns
from .order_routes import order_ns
from .product_routes import product_ns
from . import oauth_routes  # noqa: F401  registers OAuth resources on auth_ns


def register_namespaces(api):
    api.add_namespace(auth_ns)
    api.add_namespace(category_ns)
    api.add_namespace(product_ns)
    api.add_namespace(order_ns)
    api.add_namespace(health_ns)
