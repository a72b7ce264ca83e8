from flask import redirect, request
from flask_restx import Resource

from marketplace.errors import ValidationError
from marketplace.routes.auth_routes import auth_ns
from marketplace.services import oauth_service


@auth_ns.route('/oauth/<string:provider>/start')
@auth_ns.param('provider', 'google, facebook or instagram')
class OAuthStart(Resource):
    def get(self, provider):
        """Redirect to the provider's consent screen"""
        oauth_provider = oauth_service.get_provider(provider)
        return redirect(oauth_provider.authorization_url())


@auth_ns.route('/oauth/<string:provider>/callback')
@auth_ns.param('provider', 'google, facebook or instagram')
class OAuthCallback(Resource):
    @auth_ns.doc(params={'code': 'Authorization code issued by the provider'})
    def get(self, provider):
        """Finish the provider login and hand a token to the frontend"""
        oauth_provider = oauth_service.get_provider(provider)
        code = request.args.get('code')
        if not code:
            raise ValidationError('Authorization code is required')
        return redirect(oauth_service.complete_login(oauth_provider, code))
