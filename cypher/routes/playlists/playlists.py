from flask import Blueprint, jsonify, request
from cypher.utils.auth import token_required
from cypher.middleware.access import requires, is_owner
from cypher.extensions.extension import db
from cypher.models.playlist import Playlist, PlaylistTrack
from cypher.models.track import Track
from cypher.routes.route_utils import handle_errors, non_text_field, non_text_message
from http import HTTPStatus
import uuid
import logging

logger = logging.getLogger(__name__)

playlists_bp = Blueprint('playlists', __name__, url_prefix='/api/playlists')

# Other users' playlists look like missing ones
owns_playlist = is_owner(
    Playlist, 'playlist_id', 'playlist',
    conceal=True,
    not_found_message='Playlist nicht gefunden.'
)


@playlists_bp.route('', methods=['GET'])
@token_required
@handle_errors
def list_playlists(current_user):
    return jsonify({
        'message': 'Playlists geladen.',
        'playlists': [playlist.to_dict() for playlist in Playlist.for_owner(current_user.id)]
    }), HTTPStatus.OK


@playlists_bp.route('', methods=['POST'])
@token_required
@handle_errors
def create_playlist(current_user):
    data = request.get_json(silent=True) or {}
    field = non_text_field(data, 'name', 'description')
    if field:
        return jsonify({'message': non_text_message(field)}), HTTPStatus.BAD_REQUEST

    name = (data.get('name') or '').strip()
    if not name:
        return jsonify({'message': 'Bitte gib einen Namen für die Playlist an.'}), HTTPStatus.BAD_REQUEST
    if len(name) > 200:
        return jsonify({'message': 'Der Name darf höchstens 200 Zeichen lang sein.'}), HTTPStatus.BAD_REQUEST

    playlist = Playlist(
        name=name,
        description=(data.get('description') or '').strip() or None,
        user_id=current_user.id
    )
    db.session.add(playlist)
    db.session.commit()

    logger.info(f"User {current_user.id} created playlist {playlist.id}")
    return jsonify({
        'message': 'Playlist erstellt!',
        'playlist': playlist.to_dict()
    }), HTTPStatus.CREATED


@playlists_bp.route('/<uuid:playlist_id>', methods=['GET'])
@token_required
@handle_errors
@requires(owns_playlist)
def get_playlist(current_user, playlist_id, playlist):
    return jsonify({
        'message': 'Playlist geladen.',
        'playlist': playlist.to_dict(with_tracks=True)
    }), HTTPStatus.OK


@playlists_bp.route('/<uuid:playlist_id>', methods=['DELETE'])
@token_required
@handle_errors
@requires(owns_playlist)
def delete_playlist(current_user, playlist_id, playlist):
    db.session.delete(playlist)
    db.session.commit()

    logger.info(f"User {current_user.id} deleted playlist {playlist_id}")
    return jsonify({'message': 'Playlist gelöscht!'}), HTTPStatus.OK


@playlists_bp.route('/<uuid:playlist_id>/tracks', methods=['POST'])
@token_required
@handle_errors
@requires(owns_playlist)
def add_track(current_user, playlist_id, playlist):
    data = request.get_json(silent=True) or {}
    try:
        track_id = uuid.UUID(str(data.get('trackId', '')))
    except ValueError:
        return jsonify({'message': 'Bitte gib eine gültige Track-ID an.'}), HTTPStatus.BAD_REQUEST

    if not db.session.get(Track, track_id):
        return jsonify({'message': 'Track nicht gefunden.'}), HTTPStatus.NOT_FOUND

    if PlaylistTrack.add(playlist.id, track_id):
        return jsonify({
            'message': 'Track zur Playlist hinzugefügt!',
            'playlistTrack': {'playlist_id': str(playlist.id), 'track_id': str(track_id)}
        }), HTTPStatus.CREATED

    return jsonify({
        'message': 'Track ist bereits in der Playlist.',
        'playlistTrack': {'playlist_id': str(playlist.id), 'track_id': str(track_id)}
    }), HTTPStatus.OK


@playlists_bp.route('/<uuid:playlist_id>/tracks/<uuid:track_id>', methods=['DELETE'])
@token_required
@handle_errors
@requires(owns_playlist)
def remove_track(current_user, playlist_id, track_id, playlist):
    if not PlaylistTrack.remove(playlist.id, track_id):
        return jsonify({'message': 'Track ist nicht in der Playlist.'}), HTTPStatus.NOT_FOUND

    return jsonify({'message': 'Track aus der Playlist entfernt!'}), HTTPStatus.OK
