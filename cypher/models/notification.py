from cypher.extensions.extension import db
from sqlalchemy import Uuid
import enum
import uuid
from datetime import datetime


class NotificationType(enum.Enum):
    new_comment = "new_comment"
    track_liked = "track_liked"


class Notification(db.Model):
    __tablename__ = 'notifications'

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    recipient_id = db.Column(Uuid, db.ForeignKey('users.id'), nullable=False, index=True)
    sender_id = db.Column(Uuid, db.ForeignKey('users.id'), nullable=False)
    type = db.Column(db.Enum(NotificationType), nullable=False)
    message = db.Column(db.Text, nullable=False)
    track_id = db.Column(Uuid, db.ForeignKey('tracks.id', ondelete='SET NULL'), nullable=True)
    is_read = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    sender = db.relationship('User', foreign_keys=[sender_id])

    @classmethod
    def for_recipient(cls, user_id):
        return cls.query.filter_by(recipient_id=user_id).order_by(cls.created_at.desc()).all()

    def mark_read(self):
        self.is_read = True
        db.session.commit()

    def to_dict(self):
        return {
            'id': str(self.id),
            'type': self.type.value,
            'message': self.message,
            'track_id': str(self.track_id) if self.track_id else None,
            'sender_id': str(self.sender_id),
            'sender_email': self.sender.email if self.sender else None,
            'sender_artist_name': self.sender.artist_name if self.sender else None,
            'is_read': self.is_read,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
