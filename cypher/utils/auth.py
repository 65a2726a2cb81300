import logging
from functools import wraps
from flask_jwt_extended import verify_jwt_in_request, get_current_user
from flask_jwt_extended.exceptions import JWTExtendedException, NoAuthorizationError, UserLookupError
from jwt import ExpiredSignatureError, PyJWTError
from cypher.errors import AuthenticationError
from cypher.routes.route_utils import error_response

logger = logging.getLogger(__name__)


def _authentication_message(error):
    if isinstance(error, NoAuthorizationError):
        return 'Token nicht gefunden.'
    if isinstance(error, ExpiredSignatureError):
        return 'Token ist abgelaufen.'
    if isinstance(error, UserLookupError):
        return 'Ungültiges Token: Benutzer nicht gefunden.'
    return 'Token ist ungültig.'


def token_required(f):
    """Reject the request with 401 unless it carries a valid bearer token.

    The authenticated user is passed to the view as its first argument.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        try:
            verify_jwt_in_request()
        except (JWTExtendedException, PyJWTError) as e:
            logger.info(f"Rejected token for {f.__name__}: {str(e)}")
            return error_response(AuthenticationError(_authentication_message(e)))

        return f(get_current_user(), *args, **kwargs)

    return decorated
