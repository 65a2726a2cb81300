import logging
from flask import Blueprint, request, jsonify
from http import HTTPStatus
from cypher.extensions.extension import db
from cypher.models.user import User, UserRole
from cypher.routes.route_utils import handle_errors
from cypher.utils.jwt_utils import issue_token
from cypher.routes.auth.auth_utils import (
    normalize_email,
    validate_registration_input,
    validate_login_input
)

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api')


@auth_bp.route('/register', methods=['POST'])
@handle_errors
def register():
    data = request.get_json(silent=True) or {}

    valid, message = validate_registration_input(data)
    if not valid:
        return jsonify({'message': message}), HTTPStatus.BAD_REQUEST

    email = normalize_email(data.get('email'))
    artist_name = (data.get('artistName') or '').strip() or None

    if User.find_by_email(email):
        return jsonify({'message': 'E-Mail existiert bereits.'}), HTTPStatus.CONFLICT

    if artist_name and User.query.filter_by(artist_name=artist_name).first():
        return jsonify({'message': 'Künstlername existiert bereits.'}), HTTPStatus.CONFLICT

    user = User(
        email=email,
        role=UserRole(data.get('userRole', UserRole.listener.value)),
        artist_name=artist_name
    )
    user.password = data.get('password')

    db.session.add(user)
    db.session.commit()
    logger.info(f"Registered {user.role.value} {user.id}")

    return jsonify({
        'message': 'Benutzer erfolgreich registriert!',
        'user': user.to_dict()
    }), HTTPStatus.CREATED


@auth_bp.route('/login', methods=['POST'])
@handle_errors
def login():
    data = request.get_json(silent=True) or {}

    valid, message = validate_login_input(data)
    if not valid:
        return jsonify({'message': message}), HTTPStatus.BAD_REQUEST

    user = User.find_by_email(normalize_email(data.get('email')))

    if not user or not user.verify_password(data.get('password')):
        return jsonify({'message': 'Ungültige E-Mail-Adresse oder Passwort.'}), HTTPStatus.BAD_REQUEST

    return jsonify({
        'message': 'Anmeldung erfolgreich!',
        'token': issue_token(user),
        'user': {
            'id': str(user.id),
            'email': user.email,
            'role': user.role.value,
            'artistName': user.artist_name
        }
    }), HTTPStatus.OK
