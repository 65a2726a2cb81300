from flask import Blueprint, request, jsonify
from cypher.utils.auth import token_required
from cypher.middleware.access import requires, is_creator, is_owner
from cypher.extensions.extension import db, storage
from cypher.models.track import Track
from cypher.routes.route_utils import handle_errors, request_data, uploaded_file, non_text_field, non_text_message
from cypher.routes.user.user_utils import is_allowed_image
from cypher.services.s3_service import TRACKS_PREFIX, COVERS_PREFIX
from http import HTTPStatus
import logging

logger = logging.getLogger(__name__)

tracks_bp = Blueprint('tracks', __name__, url_prefix='/api')

owns_track = is_owner(
    Track, 'track_id', 'track',
    owner_attr='artist_id',
    not_found_message='Track nicht gefunden.'
)


def _validate_track_fields(data, require_title):
    field = non_text_field(data, 'title', 'genre', 'description')
    if field:
        return False, non_text_message(field)

    title = (data.get('title') or '').strip()
    if require_title and not title:
        return False, 'Bitte gib einen Titel an.'
    if 'title' in data and not title:
        return False, 'Der Titel darf nicht leer sein.'
    if len(title) > 200:
        return False, 'Der Titel darf höchstens 200 Zeichen lang sein.'
    if len((data.get('genre') or '').strip()) > 50:
        return False, 'Das Genre darf höchstens 50 Zeichen lang sein.'
    return True, None


@tracks_bp.route('/tracks/upload', methods=['POST'])
@tracks_bp.route('/upload', methods=['POST'])
@token_required
@handle_errors
@requires(is_creator)
def upload_track(current_user):
    audio_file = uploaded_file('audioFile')
    if not audio_file:
        return jsonify({'message': 'Keine Datei zum Hochladen gefunden.'}), HTTPStatus.BAD_REQUEST

    cover_file = uploaded_file('coverArt')
    if cover_file and not is_allowed_image(cover_file):
        return jsonify({'message': 'Das Cover muss ein JPG, PNG, GIF oder WEBP sein.'}), HTTPStatus.BAD_REQUEST

    data = request.form.to_dict()
    valid, message = _validate_track_fields(data, require_title=True)
    if not valid:
        return jsonify({'message': message}), HTTPStatus.BAD_REQUEST

    file_key = storage.upload_file(audio_file, TRACKS_PREFIX)
    cover_art_key = storage.upload_file(cover_file, COVERS_PREFIX) if cover_file else None

    track = Track(
        title=data['title'].strip(),
        genre=(data.get('genre') or '').strip() or None,
        description=data.get('description'),
        artist_id=current_user.id,
        file_key=file_key,
        cover_art_key=cover_art_key
    )
    try:
        db.session.add(track)
        db.session.commit()
    except Exception:
        logger.error(f"Track metadata insert failed, objects {file_key} {cover_art_key} are orphaned")
        raise

    logger.info(f"User {current_user.id} uploaded track {track.id}")
    return jsonify({
        'message': 'Datei erfolgreich hochgeladen und Metadaten gespeichert!',
        'fileKey': file_key,
        'track': track.to_dict()
    }), HTTPStatus.CREATED


@tracks_bp.route('/tracks', methods=['GET'])
@token_required
@handle_errors
def list_tracks(current_user):
    tracks = Track.search(
        q=request.args.get('q', '').strip() or None,
        genre=request.args.get('genre', '').strip() or None
    )
    return jsonify({
        'message': 'Tracks geladen.',
        'tracks': [track.to_dict() for track in tracks]
    }), HTTPStatus.OK


@tracks_bp.route('/tracks/user', methods=['GET'])
@token_required
@handle_errors
def list_user_tracks(current_user):
    tracks = Track.for_artist(current_user.id)
    return jsonify({
        'message': 'Deine Tracks.',
        'tracks': [track.to_dict() for track in tracks]
    }), HTTPStatus.OK


@tracks_bp.route('/tracks/<uuid:track_id>', methods=['GET'])
@token_required
@handle_errors
def get_track(current_user, track_id):
    track = db.session.get(Track, track_id)
    if not track:
        return jsonify({'message': 'Track nicht gefunden.'}), HTTPStatus.NOT_FOUND
    return jsonify({'message': 'Track geladen.', 'track': track.to_dict()}), HTTPStatus.OK


@tracks_bp.route('/tracks/download/<uuid:track_id>', methods=['GET'])
@token_required
@handle_errors
def download_track(current_user, track_id):
    track = db.session.get(Track, track_id)
    if not track:
        return jsonify({'message': 'Track nicht gefunden.'}), HTTPStatus.NOT_FOUND

    return jsonify({
        'message': 'Download-Link erstellt.',
        'downloadUrl': storage.get_signed_url(track.file_key)
    }), HTTPStatus.OK


@tracks_bp.route('/tracks/cover/<path:cover_art_key>', methods=['GET'])
@token_required
@handle_errors
def get_cover_url(current_user, cover_art_key):
    # Only keys that belong to a track get signed
    if not Track.query.filter_by(cover_art_key=cover_art_key).first():
        return jsonify({'message': 'Cover nicht gefunden.'}), HTTPStatus.NOT_FOUND

    return jsonify({
        'message': 'Cover-Link erstellt.',
        'url': storage.get_signed_url(cover_art_key)
    }), HTTPStatus.OK


@tracks_bp.route('/tracks/<uuid:track_id>', methods=['PUT'])
@token_required
@handle_errors
@requires(is_creator, owns_track)
def update_track(current_user, track_id, track):
    data = request_data()
    cover_file = uploaded_file('coverArt')

    valid, message = _validate_track_fields(data, require_title=False)
    if not valid:
        return jsonify({'message': message}), HTTPStatus.BAD_REQUEST

    if cover_file and not is_allowed_image(cover_file):
        return jsonify({'message': 'Das Cover muss ein JPG, PNG, GIF oder WEBP sein.'}), HTTPStatus.BAD_REQUEST

    if 'title' in data:
        track.title = data['title'].strip()
    if 'genre' in data:
        track.genre = (data.get('genre') or '').strip() or None
    if 'description' in data:
        track.description = data.get('description')

    old_cover_key = None
    if cover_file:
        old_cover_key = track.cover_art_key
        track.cover_art_key = storage.upload_file(cover_file, COVERS_PREFIX)

    db.session.commit()
    storage.delete_quietly(old_cover_key)

    logger.info(f"User {current_user.id} updated track {track.id}")
    return jsonify({
        'message': 'Track erfolgreich aktualisiert!',
        'track': track.to_dict()
    }), HTTPStatus.OK


@tracks_bp.route('/tracks/<uuid:track_id>', methods=['DELETE'])
@token_required
@handle_errors
@requires(is_creator, owns_track)
def delete_track(current_user, track_id, track):
    keys = (track.file_key, track.cover_art_key)

    db.session.delete(track)
    db.session.commit()

    # Row first: a failed object delete leaves an orphan, never a dangling row
    storage.delete_quietly(*keys)

    logger.info(f"User {current_user.id} deleted track {track_id}")
    return jsonify({'message': 'Track erfolgreich gelöscht!'}), HTTPStatus.OK
