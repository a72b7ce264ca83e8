# OAuth service module: provider code exchange and local identity resolution
from collections import namedtuple
from urllib.parse import urlencode
import logging
import secrets

import requests
from flask import current_app
from flask_jwt_extended import create_access_token
from sqlalchemy.exc import SQLAlchemyError

from marketplace import db
from marketplace.errors import NotFound
from marketplace.models import User
from marketplace.utils.auth_middleware import generate_token

logger = logging.getLogger(__name__)

ProviderProfile = namedtuple(
    'ProviderProfile',
    ['provider', 'provider_id', 'email', 'name', 'picture', 'email_is_placeholder']
)

# A provider login either maps onto an existing local user or it does not.
Linked = namedtuple('Linked', ['user'])
Unlinked = namedtuple('Unlinked', ['profile'])


class OAuthProviderError(Exception):
    """The provider answered, but not with what the login flow needs."""


class OAuthProvider:
    name = None
    authorize_endpoint = None
    scope = None
    client_id_key = None
    client_secret_key = None
    redirect_uri_key = None

    def __init__(self, config):
        self.config = config
        self.timeout = config.get('OAUTH_HTTP_TIMEOUT', 10)

    @property
    def client_id(self):
        return self.config.get(self.client_id_key, '')

    @property
    def client_secret(self):
        return self.config.get(self.client_secret_key, '')

    @property
    def redirect_uri(self):
        return self.config.get(self.redirect_uri_key, '')

    def authorization_params(self):
        return {
            'client_id': self.client_id,
            'redirect_uri': self.redirect_uri,
            'response_type': 'code',
            'scope': self.scope
        }

    def authorization_url(self):
        return f'{self.authorize_endpoint}?{urlencode(self.authorization_params())}'

    def fetch_profile(self, code):
        raise NotImplementedError

    def _get(self, url, **kwargs):
        response = requests.get(url, timeout=self.timeout, **kwargs)
        response.raise_for_status()
        return response.json()

    def _post(self, url, **kwargs):
        response = requests.post(url, timeout=self.timeout, **kwargs)
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _require(payload, key):
        value = payload.get(key) if isinstance(payload, dict) else None
        if not value:
            raise OAuthProviderError(f'Provider response is missing {key}')
        return value


class GoogleProvider(OAuthProvider):
    name = 'google'
    authorize_endpoint = 'https://accounts.google.com/o/oauth2/v2/auth'
    token_endpoint = 'https://oauth2.googleapis.com/token'
    userinfo_endpoint = 'https://www.googleapis.com/oauth2/v2/userinfo'
    scope = 'openid email profile'
    client_id_key = 'GOOGLE_CLIENT_ID'
    client_secret_key = 'GOOGLE_CLIENT_SECRET'
    redirect_uri_key = 'GOOGLE_REDIRECT_URI'

    def authorization_params(self):
        params = super().authorization_params()
        params.update({'access_type': 'offline', 'prompt': 'consent'})
        return params

    def fetch_profile(self, code):
        token_data = self._post(self.token_endpoint, data={
            'code': code,
            'client_id': self.client_id,
            'client_secret': self.client_secret,
            'redirect_uri': self.redirect_uri,
            'grant_type': 'authorization_code'
        })
        access_token = self._require(token_data, 'access_token')

        user_info = self._get(self.userinfo_endpoint, headers={'Authorization': f'Bearer {access_token}'})
        return ProviderProfile(
            provider=self.name,
            provider_id=str(self._require(user_info, 'id')),
            email=self._require(user_info, 'email'),
            name=user_info.get('name'),
            picture=user_info.get('picture'),
            email_is_placeholder=False
        )


class FacebookProvider(OAuthProvider):
    name = 'facebook'
    authorize_endpoint = 'https://www.facebook.com/v18.0/dialog/oauth'
    token_endpoint = 'https://graph.facebook.com/v18.0/oauth/access_token'
    userinfo_endpoint = 'https://graph.facebook.com/me'
    scope = 'email,public_profile'
    client_id_key = 'FACEBOOK_APP_ID'
    client_secret_key = 'FACEBOOK_APP_SECRET'
    redirect_uri_key = 'FACEBOOK_REDIRECT_URI'

    def authorization_params(self):
        params = super().authorization_params()
        params['state'] = secrets.token_urlsafe(16)
        return params

    @staticmethod
    def _picture_url(user_info):
        # Graph API nests the URL as picture.data.url
        picture = user_info.get('picture')
        data = picture.get('data') if isinstance(picture, dict) else None
        return data.get('url') if isinstance(data, dict) else None

    def fetch_profile(self, code):
        token_data = self._get(self.token_endpoint, params={
            'client_id': self.client_id,
            'client_secret': self.client_secret,
            'redirect_uri': self.redirect_uri,
            'code': code
        })
        access_token = self._require(token_data, 'access_token')

        user_info = self._get(self.userinfo_endpoint, params={
            'fields': 'id,name,email,picture',
            'access_token': access_token
        })
        provider_id = str(self._require(user_info, 'id'))
        email = user_info.get('email')
        picture = self._picture_url(user_info)
        return ProviderProfile(
            provider=self.name,
            provider_id=provider_id,
            email=email or f'{provider_id}@facebook.com',
            name=user_info.get('name'),
            picture=picture,
            email_is_placeholder=not email
        )


class InstagramProvider(OAuthProvider):
    name = 'instagram'
    authorize_endpoint = 'https://api.instagram.com/oauth/authorize'
    token_endpoint = 'https://api.instagram.com/oauth/access_token'
    long_lived_token_endpoint = 'https://graph.instagram.com/access_token'
    graph_endpoint = 'https://graph.instagram.com'
    scope = 'user_profile,user_media'
    client_id_key = 'INSTAGRAM_CLIENT_ID'
    client_secret_key = 'INSTAGRAM_CLIENT_SECRET'
    redirect_uri_key = 'INSTAGRAM_REDIRECT_URI'

    def fetch_profile(self, code):
        token_data = self._post(self.token_endpoint, data={
            'client_id': self.client_id,
            'client_secret': self.client_secret,
            'grant_type': 'authorization_code',
            'redirect_uri': self.redirect_uri,
            'code': code
        })
        short_lived_token = self._require(token_data, 'access_token')
        user_id = self._require(token_data, 'user_id')

        long_lived = self._get(self.long_lived_token_endpoint, params={
            'grant_type': 'ig_exchange_token',
            'client_secret': self.client_secret,
            'access_token': short_lived_token
        })
        access_token = self._require(long_lived, 'access_token')

        user_info = self._get(f'{self.graph_endpoint}/{user_id}', params={
            'fields': 'id,username,account_type',
            'access_token': access_token
        })
        username = self._require(user_info, 'username')
        # Instagram never shares an email address.
        return ProviderProfile(
            provider=self.name,
            provider_id=str(self._require(user_info, 'id')),
            email=f'{username}@instagram.com',
            name=username,
            picture=None,
            email_is_placeholder=True
        )


PROVIDERS = {
    GoogleProvider.name: GoogleProvider,
    FacebookProvider.name: FacebookProvider,
    InstagramProvider.name: InstagramProvider
}


def get_provider(name, config=None):
    provider_class = PROVIDERS.get(name)
    if provider_class is None:
        raise NotFound(f'Unknown OAuth provider: {name}')
    return provider_class(config if config is not None else current_app.config)


def resolve_identity(profile):
    """Match a provider profile to a local user by its real email address."""
    if not profile.email_is_placeholder:
        user = User.query.filter_by(email=profile.email).first()
        if user:
            return Linked(user)
    return Unlinked(profile)


def issue_oauth_token(resolution):
    if isinstance(resolution, Linked):
        return generate_token(resolution.user)
    profile = resolution.profile
    # No local user: the subject is provider scoped and carries no role, so
    # protected routes reject it.
    return create_access_token(
        identity=f'{profile.provider}:{profile.provider_id}',
        additional_claims={'email': profile.email, 'provider': profile.provider}
    )


def success_redirect_url(token):
    return f"{current_app.config['FRONTEND_URL']}/auth/callback?{urlencode({'token': token})}"


def failure_redirect_url(provider_name):
    return f"{current_app.config['FRONTEND_URL']}/auth/error?{urlencode({'message': f'{provider_name}_auth_failed'})}"


def complete_login(provider, code):
    """Run the callback half of the flow and return the frontend URL to redirect to."""
    try:
        profile = provider.fetch_profile(code)
        if not isinstance(profile.email, str):
            raise OAuthProviderError('Provider returned a malformed email')
    except (requests.RequestException, ValueError, OAuthProviderError) as e:
        logger.error(f"{provider.name} OAuth error: {str(e)}")
        return failure_redirect_url(provider.name)

    try:
        resolution = resolve_identity(profile)
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"{provider.name} OAuth user lookup failed: {str(e)}")
        return failure_redirect_url(provider.name)

    if isinstance(resolution, Linked):
        logger.info(f"{provider.name} login linked to user {resolution.user.id}")
    else:
        logger.info(f"{provider.name} login for unlinked account {profile.provider_id}")
    return success_redirect_url(issue_oauth_token(resolution))
