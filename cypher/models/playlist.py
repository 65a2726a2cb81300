from cypher.extensions.extension import db
from cypher.utils.db_utils import insert_ignore
from sqlalchemy import Uuid, delete
import uuid
from datetime import datetime


class Playlist(db.Model):
    __tablename__ = 'playlists'

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    user_id = db.Column(Uuid, db.ForeignKey('users.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    entries = db.relationship('PlaylistTrack', backref='playlist',
                              cascade='all, delete-orphan',
                              order_by='PlaylistTrack.added_at')

    @classmethod
    def for_owner(cls, user_id):
        return cls.query.filter_by(user_id=user_id).order_by(cls.created_at.desc()).all()

    def to_dict(self, with_tracks=False):
        data = {
            'id': str(self.id),
            'name': self.name,
            'description': self.description,
            'user_id': str(self.user_id),
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
        if with_tracks:
            data['tracks'] = [
                dict(entry.track.to_dict(), added_at=entry.added_at.isoformat())
                for entry in self.entries
            ]
        return data


class PlaylistTrack(db.Model):
    __tablename__ = 'playlist_tracks'

    playlist_id = db.Column(Uuid, db.ForeignKey('playlists.id', ondelete='CASCADE'), primary_key=True)
    track_id = db.Column(Uuid, db.ForeignKey('tracks.id', ondelete='CASCADE'), primary_key=True)
    added_at = db.Column(db.DateTime, default=datetime.utcnow)

    @classmethod
    def add(cls, playlist_id, track_id):
        """Add a track to a playlist. Adding it again is a no-op.

        Returns True when a new membership row was written.
        """
        result = db.session.execute(
            insert_ignore(cls).values(
                playlist_id=playlist_id,
                track_id=track_id,
                added_at=datetime.utcnow()
            )
        )
        db.session.commit()
        return result.rowcount > 0

    @classmethod
    def remove(cls, playlist_id, track_id):
        result = db.session.execute(
            delete(cls).where(cls.playlist_id == playlist_id, cls.track_id == track_id)
        )
        db.session.commit()
        return result.rowcount > 0
