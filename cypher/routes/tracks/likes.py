from flask import Blueprint, jsonify
from cypher.extensions.extension import db
from cypher.models.track import Track
from cypher.models.track_like import TrackLike
from cypher.services.notification_service import NotificationService
from cypher.routes.route_utils import handle_errors
from cypher.utils.auth import token_required
from http import HTTPStatus

likes_bp = Blueprint('likes', __name__, url_prefix='/api/tracks')


@likes_bp.route('/<uuid:track_id>/likes', methods=['GET'])
@token_required
@handle_errors
def get_likes(current_user, track_id):
    if not db.session.get(Track, track_id):
        return jsonify({'message': 'Track nicht gefunden.'}), HTTPStatus.NOT_FOUND

    return jsonify({
        'message': 'Likes geladen.',
        'likeCount': TrackLike.count_for(track_id),
        'userLiked': TrackLike.exists(track_id, current_user.id)
    }), HTTPStatus.OK


@likes_bp.route('/<uuid:track_id>/like', methods=['POST'])
@token_required
@handle_errors
def toggle_like(current_user, track_id):
    """Like the track, or remove the like if it is already there."""
    track = db.session.get(Track, track_id)
    if not track:
        return jsonify({'message': 'Track nicht gefunden.'}), HTTPStatus.NOT_FOUND

    liked = TrackLike.toggle(track_id, current_user.id)
    if liked:
        NotificationService(db.session).notify_like(track, current_user)

    return jsonify({
        'message': 'Track geliked' if liked else 'Like entfernt',
        'likeCount': TrackLike.count_for(track_id),
        'userLiked': liked
    }), HTTPStatus.CREATED if liked else HTTPStatus.OK
