from flask_restx import Namespace, Resource, fields
from flask import request

from marketplace.services import auth_service
from marketplace.utils import generate_token, get_current_identity, token_required

auth_ns = Namespace('auth', description='Authentication operations', path='/auth')

signup_model = auth_ns.model('Signup', {
    'name': fields.String(required=True, description='Display name'),
    'email': fields.String(required=True, description='Email address'),
    'password': fields.String(required=True, description='Password'),
    'role': fields.String(description='buyer or seller (defaults to buyer)', enum=['buyer', 'seller'])
})

login_model = auth_ns.model('Login', {
    'email': fields.String(required=True, description='Email address'),
    'password': fields.String(required=True, description='Password')
})


def auth_payload(user):
    return {
        'token': generate_token(user),
        'user': user.to_dict()
    }


@auth_ns.route('/signup')
class Signup(Resource):
    @auth_ns.expect(signup_model)
    def post(self):
        """Register a buyer or seller account"""
        user = auth_service.register_user(request.get_json(silent=True))
        return auth_payload(user), 201


@auth_ns.route('/login')
class Login(Resource):
    @auth_ns.expect(login_model)
    def post(self):
        """Log in with email and password"""
        user = auth_service.authenticate(request.get_json(silent=True))
        return auth_payload(user), 200


@auth_ns.route('/admin/login')
class AdminLogin(Resource):
    @auth_ns.expect(login_model)
    def post(self):
        """Log in as an administrator"""
        admin = auth_service.authenticate_admin(request.get_json(silent=True))
        return auth_payload(admin), 200


@auth_ns.route('/me')
class Me(Resource):
    @token_required
    @auth_ns.doc(security='BearerAuth')
    def get(self):
        """Return the identity carried by the bearer token"""
        identity = get_current_identity()
        return {
            'user': {
                'id': identity.id,
                'email': identity.email,
                'role': identity.role.value
            }
        }, 200
