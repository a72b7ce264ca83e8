from marketplace.utils.auth_middleware import Identity, generate_token, get_current_identity, token_required
from marketplace.utils.util import role_required

__all__ = ['Identity', 'generate_token', 'get_current_identity', 'token_required', 'role_required']
