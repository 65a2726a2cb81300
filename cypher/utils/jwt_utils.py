import logging
import uuid
from flask_jwt_extended import create_access_token, get_jwt
from cypher.extensions.extension import db, jwt
from cypher.models.user import User

logger = logging.getLogger(__name__)


@jwt.user_lookup_loader
def load_user(jwt_header, jwt_data):
    try:
        user_id = uuid.UUID(jwt_data['sub'])
    except (KeyError, ValueError, TypeError):
        return None
    return db.session.get(User, user_id)


def issue_token(user):
    """Signed access token carrying the user id and role."""
    return create_access_token(
        identity=str(user.id),
        additional_claims={'role': user.role.value}
    )


def current_claims():
    claims = get_jwt()
    return {
        'user_id': claims.get('sub'),
        'role': claims.get('role'),
        'expires_at': claims.get('exp')
    }
