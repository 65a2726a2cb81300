from cypher.extensions.extension import db
from sqlalchemy import Uuid, or_
import uuid
from datetime import datetime


class Track(db.Model):
    __tablename__ = 'tracks'

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = db.Column(db.String, nullable=False)
    genre = db.Column(db.String(50))
    description = db.Column(db.Text)
    artist_id = db.Column(Uuid, db.ForeignKey('users.id'), nullable=False, index=True)
    file_key = db.Column(db.String, nullable=False)
    cover_art_key = db.Column(db.String, nullable=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    comments = db.relationship('Comment', backref='track', cascade='all, delete-orphan')
    user_likes = db.relationship('TrackLike', backref='track', cascade='all, delete-orphan')
    playlist_entries = db.relationship('PlaylistTrack', backref='track', cascade='all, delete-orphan')
    # Notifications outlive the track, their track_id is cleared
    notifications = db.relationship('Notification', backref='track')

    @classmethod
    def search(cls, q=None, genre=None):
        """Tracks matching every given filter, newest first.

        ``q`` matches title or artist name as a case insensitive substring,
        ``genre`` must match exactly.
        """
        from cypher.models.user import User

        query = cls.query.join(User, cls.artist_id == User.id)
        conditions = []
        if q:
            conditions.append(or_(
                cls.title.icontains(q, autoescape=True),
                User.artist_name.icontains(q, autoescape=True)
            ))
        if genre:
            conditions.append(cls.genre == genre)
        if conditions:
            query = query.filter(*conditions)
        return query.order_by(cls.created_at.desc()).all()

    @classmethod
    def for_artist(cls, user_id):
        return cls.query.filter_by(artist_id=user_id).order_by(cls.created_at.desc()).all()

    def to_dict(self):
        return {
            'id': str(self.id),
            'title': self.title,
            'genre': self.genre,
            'description': self.description,
            'artist_id': str(self.artist_id),
            'artist_name': self.artist.artist_name if self.artist else None,
            'file_key': self.file_key,
            'cover_art_key': self.cover_art_key,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
