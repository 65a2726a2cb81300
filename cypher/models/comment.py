from cypher.extensions.extension import db
from sqlalchemy import Uuid
import uuid
from datetime import datetime


class Comment(db.Model):
    __tablename__ = 'comments'

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    track_id = db.Column(Uuid, db.ForeignKey('tracks.id', ondelete='CASCADE'), nullable=False, index=True)
    user_id = db.Column(Uuid, db.ForeignKey('users.id'), nullable=False)
    comment_text = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    author = db.relationship('User')

    @classmethod
    def for_track(cls, track_id):
        return cls.query.filter_by(track_id=track_id).order_by(cls.created_at.asc()).all()

    def to_dict(self):
        return {
            'id': str(self.id),
            'track_id': str(self.track_id),
            'user_id': str(self.user_id),
            'email': self.author.email,
            'artist_name': self.author.artist_name,
            'comment_text': self.comment_text,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
