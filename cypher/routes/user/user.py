from flask import Blueprint, jsonify, request
from cypher.utils.auth import token_required
from cypher.utils.jwt_utils import issue_token, current_claims
from cypher.extensions.extension import db, storage
from cypher.models.user import User, UserRole
from cypher.routes.route_utils import handle_errors, request_data, uploaded_file
from cypher.routes.auth.auth_utils import validate_role_input
from cypher.routes.user.user_utils import validate_profile_update, is_allowed_image, profile_payload
from cypher.services.s3_service import PROFILE_PICTURE_PREFIX
from http import HTTPStatus
import logging

logger = logging.getLogger(__name__)

user_bp = Blueprint('user', __name__, url_prefix='/api')


def _artist_name_taken(artist_name, user):
    other = User.query.filter_by(artist_name=artist_name).first()
    return other is not None and other.id != user.id


@user_bp.route('/user/me', methods=['GET'])
@token_required
@handle_errors
def get_me(current_user):
    return jsonify({
        'message': 'Benutzer geladen.',
        'claims': current_claims(),
        'user': current_user.to_dict()
    }), HTTPStatus.OK


@user_bp.route('/profile', methods=['GET'])
@token_required
@handle_errors
def get_profile(current_user):
    return jsonify({
        'message': 'Profil geladen.',
        'profile': profile_payload(current_user)
    }), HTTPStatus.OK


@user_bp.route('/profile', methods=['PUT'])
@token_required
@handle_errors
def update_profile(current_user):
    logger.info(f"Profile update requested for user ID: {current_user.id}")
    data = request_data()
    picture = uploaded_file('profilePicture')

    valid, message = validate_profile_update(data, current_user)
    if not valid:
        return jsonify({'message': message}), HTTPStatus.BAD_REQUEST

    if picture and not is_allowed_image(picture):
        return jsonify({'message': 'Dateityp nicht erlaubt. Bitte lade ein JPG, PNG, GIF oder WEBP hoch.'}), HTTPStatus.BAD_REQUEST

    if 'artistName' in data:
        artist_name = (data.get('artistName') or '').strip() or None
        if artist_name and _artist_name_taken(artist_name, current_user):
            return jsonify({'message': 'Künstlername existiert bereits.'}), HTTPStatus.CONFLICT
        current_user.artist_name = artist_name

    if 'bio' in data:
        current_user.bio = (data.get('bio') or '').strip() or None

    old_picture_key = None
    if picture:
        old_picture_key = current_user.profile_picture_key
        current_user.profile_picture_key = storage.upload_file(picture, PROFILE_PICTURE_PREFIX)

    db.session.commit()
    logger.info(f"User {current_user.id} updated successfully")

    # The replaced picture goes only after the new key is committed
    storage.delete_quietly(old_picture_key)

    return jsonify({
        'message': 'Profil erfolgreich aktualisiert!',
        'profile': profile_payload(current_user)
    }), HTTPStatus.OK


@user_bp.route('/user/role', methods=['PUT'])
@token_required
@handle_errors
def change_role(current_user):
    data = request.get_json(silent=True) or {}

    valid, message = validate_role_input(data)
    if not valid:
        return jsonify({'message': message}), HTTPStatus.BAD_REQUEST

    new_role = UserRole(data['newRole'])

    if new_role == UserRole.creator:
        artist_name = (data.get('artistName') or '').strip() or current_user.artist_name
        if not artist_name:
            return jsonify({'message': 'Creators müssen einen Künstlernamen angeben.'}), HTTPStatus.BAD_REQUEST
        if _artist_name_taken(artist_name, current_user):
            return jsonify({'message': 'Künstlername existiert bereits.'}), HTTPStatus.CONFLICT
        current_user.artist_name = artist_name

    old_role = current_user.role
    current_user.role = new_role
    db.session.commit()
    logger.info(f"User {current_user.id} changed role from {old_role.value} to {new_role.value}")

    # The old token still carries the previous role
    return jsonify({
        'message': 'Rolle erfolgreich geändert!',
        'token': issue_token(current_user),
        'user': current_user.to_dict()
    }), HTTPStatus.OK
