from collections import namedtuple
from functools import wraps
import logging

from flask import request, g
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from marketplace.errors import Unauthenticated
from marketplace.models.user_model import Role

logger = logging.getLogger(__name__)

Identity = namedtuple('Identity', ['id', 'email', 'role'])


def generate_token(user):
    """Issue a bearer credential carrying the user's id, email and role."""
    return create_access_token(
        identity=str(user.id),
        additional_claims={'email': user.email, 'role': user.role.value}
    )


def get_bearer_token():
    auth_header = request.headers.get('Authorization', '')
    if not auth_header.startswith('Bearer '):
        return None
    token = auth_header[len('Bearer '):].strip()
    return token or None


def verify_token(token):
    """Decode a bearer credential into an Identity.

    Raises Unauthenticated for bad signatures, expired tokens and tokens whose
    subject or role does not describe a local user.
    """
    try:
        claims = decode_token(token)
    except (PyJWTError, JWTExtendedException) as e:
        raise Unauthenticated('Invalid token') from e

    try:
        user_id = int(claims['sub'])
        role = Role(claims['role'])
        email = claims['email']
    except (KeyError, TypeError, ValueError) as e:
        raise Unauthenticated('Invalid token') from e
    return Identity(id=user_id, email=email, role=role)


def token_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        g.pop('current_identity', None)
        token = get_bearer_token()
        if not token:
            logger.warning(f"Missing bearer token on {request.method} {request.path}")
            raise Unauthenticated('Missing or invalid token')

        try:
            g.current_identity = verify_token(token)
        except Unauthenticated:
            logger.warning(f"Rejected bearer token on {request.method} {request.path}")
            raise
        return f(*args, **kwargs)
    return decorated


def get_current_identity():
    return g.get('current_identity')
