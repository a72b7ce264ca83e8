"""Error taxonomy shared by resources and services.

Every error is an ``HTTPException`` so Flask-RESTX renders it with the right
status code; ``register_error_handlers`` gives them a uniform
``{"message": ...}`` body.
"""
from werkzeug.exceptions import HTTPException


class MarketplaceError(HTTPException):
    code = 500
    description = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(description=message or self.description)

    @property
    def message(self):
        return self.description


class ValidationError(MarketplaceError):
    code = 400
    description = 'Invalid request'


class Unauthenticated(MarketplaceError):
    code = 401
    description = 'Unauthorized'


class Forbidden(MarketplaceError):
    code = 403
    description = 'Forbidden'


class NotFound(MarketplaceError):
    code = 404
    description = 'Not found'


class Conflict(MarketplaceError):
    code = 409
    description = 'Conflict'


class InternalError(MarketplaceError):
    code = 500
    description = 'Internal server error'


def register_error_handlers(api):
    @api.errorhandler(MarketplaceError)
    def handle_marketplace_error(error):
        return {'message': error.message}, error.code
