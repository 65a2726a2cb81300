import logging
from cypher.models.notification import Notification, NotificationType

logger = logging.getLogger(__name__)


def display_name(user):
    return user.artist_name or user.email


class NotificationService:
    """Creates notifications for track owners when other users interact."""

    def __init__(self, session):
        self.session = session

    def create_notification(self, recipient_id, sender_id, notification_type, message, track_id=None):
        # Acting on your own track never notifies
        if recipient_id == sender_id:
            return None

        notification = Notification(
            recipient_id=recipient_id,
            sender_id=sender_id,
            type=notification_type,
            message=message,
            track_id=track_id
        )
        self.session.add(notification)
        self.session.commit()

        logger.info(f"Created {notification_type.value} notification for user {recipient_id}")
        return notification

    def notify_comment(self, track, sender):
        return self.create_notification(
            recipient_id=track.artist_id,
            sender_id=sender.id,
            notification_type=NotificationType.new_comment,
            message=f"{display_name(sender)} hat deinen Track \"{track.title}\" kommentiert.",
            track_id=track.id
        )

    def notify_like(self, track, sender):
        # Re-liking does not stack while the earlier notification is unread
        pending = Notification.query.filter_by(
            recipient_id=track.artist_id,
            sender_id=sender.id,
            track_id=track.id,
            type=NotificationType.track_liked,
            is_read=False
        ).first()
        if pending:
            return pending

        return self.create_notification(
            recipient_id=track.artist_id,
            sender_id=sender.id,
            notification_type=NotificationType.track_liked,
            message=f"{display_name(sender)} gefällt dein Track \"{track.title}\".",
            track_id=track.id
        )
