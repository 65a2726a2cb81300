from flask import Blueprint, jsonify
from cypher.utils.auth import token_required
from cypher.middleware.access import requires, is_owner
from cypher.models.notification import Notification
from cypher.routes.route_utils import handle_errors
from http import HTTPStatus

notifications_bp = Blueprint('notifications', __name__, url_prefix='/api/notifications')


@notifications_bp.route('', methods=['GET'])
@token_required
@handle_errors
def list_notifications(current_user):
    notifications = Notification.for_recipient(current_user.id)
    return jsonify({
        'message': 'Benachrichtigungen geladen.',
        'notifications': [notification.to_dict() for notification in notifications],
        'unread': sum(1 for notification in notifications if not notification.is_read)
    }), HTTPStatus.OK


@notifications_bp.route('/<uuid:notification_id>/read', methods=['PUT'])
@token_required
@handle_errors
@requires(is_owner(
    Notification, 'notification_id', 'notification',
    owner_attr='recipient_id',
    conceal=True,
    not_found_message='Benachrichtigung nicht gefunden.'
))
def mark_read(current_user, notification_id, notification):
    notification.mark_read()
    return jsonify({
        'message': 'Benachrichtigung als gelesen markiert.',
        'notification': notification.to_dict()
    }), HTTPStatus.OK
