from functools import wraps

from marketplace.errors import Forbidden, Unauthenticated
from marketplace.utils.auth_middleware import get_current_identity


def role_required(*roles):
    """Allow the request only when the authenticated role is one of ``roles``.

    Must sit beneath ``token_required``; without an identity the request is
    rejected as unauthenticated, not forbidden.
    """
    allowed = frozenset(roles)

    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            identity = get_current_identity()
            if identity is None:
                raise Unauthenticated('Unauthorized')
            if identity.role not in allowed:
                raise Forbidden('Forbidden')
            return fn(*args, **kwargs)
        return decorator
    return wrapper
