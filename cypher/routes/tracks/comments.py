from flask import Blueprint, jsonify, request
from cypher.extensions.extension import db
from cypher.models.track import Track
from cypher.models.comment import Comment
from cypher.services.notification_service import NotificationService
from cypher.routes.route_utils import handle_errors, non_text_field, non_text_message
from cypher.utils.auth import token_required
from http import HTTPStatus
import logging

logger = logging.getLogger(__name__)

comments_bp = Blueprint('comments', __name__, url_prefix='/api/tracks')

MAX_COMMENT_LENGTH = 1000


@comments_bp.route('/<uuid:track_id>/comments', methods=['GET'])
@token_required
@handle_errors
def list_comments(current_user, track_id):
    if not db.session.get(Track, track_id):
        return jsonify({'message': 'Track nicht gefunden.'}), HTTPStatus.NOT_FOUND

    return jsonify({
        'message': 'Kommentare geladen.',
        'comments': [comment.to_dict() for comment in Comment.for_track(track_id)]
    }), HTTPStatus.OK


@comments_bp.route('/<uuid:track_id>/comments', methods=['POST'])
@token_required
@handle_errors
def add_comment(current_user, track_id):
    data = request.get_json(silent=True) or {}
    field = non_text_field(data, 'text', 'comment_text')
    if field:
        return jsonify({'message': non_text_message(field)}), HTTPStatus.BAD_REQUEST

    text = (data.get('text') or data.get('comment_text') or '').strip()
    if not text:
        return jsonify({'message': 'Der Kommentar darf nicht leer sein.'}), HTTPStatus.BAD_REQUEST
    if len(text) > MAX_COMMENT_LENGTH:
        return jsonify({'message': f'Der Kommentar darf höchstens {MAX_COMMENT_LENGTH} Zeichen lang sein.'}), HTTPStatus.BAD_REQUEST

    track = db.session.get(Track, track_id)
    if not track:
        return jsonify({'message': 'Track nicht gefunden.'}), HTTPStatus.NOT_FOUND

    comment = Comment(track_id=track.id, user_id=current_user.id, comment_text=text)
    db.session.add(comment)
    db.session.commit()
    logger.info(f"User {current_user.id} commented on track {track.id}")

    NotificationService(db.session).notify_comment(track, current_user)

    return jsonify({
        'message': 'Kommentar hinzugefügt!',
        'comment': comment.to_dict()
    }), HTTPStatus.CREATED
