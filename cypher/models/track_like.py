from cypher.extensions.extension import db
from cypher.utils.db_utils import insert_ignore
from sqlalchemy import Uuid, delete
from datetime import datetime


class TrackLike(db.Model):
    __tablename__ = 'track_likes'

    # One like per user and track
    track_id = db.Column(Uuid, db.ForeignKey('tracks.id', ondelete='CASCADE'), primary_key=True)
    user_id = db.Column(Uuid, db.ForeignKey('users.id'), primary_key=True, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    user = db.relationship('User', backref=db.backref('liked_tracks', lazy='dynamic'))

    @classmethod
    def toggle(cls, track_id, user_id):
        """Flip the like state of ``user_id`` on ``track_id``.

        Runs as a conditional delete followed by an insert that ignores
        conflicts, so concurrent toggles never double insert or double delete.
        Returns True when the track is liked afterwards.
        """
        deleted = db.session.execute(
            delete(cls).where(cls.track_id == track_id, cls.user_id == user_id)
        ).rowcount
        if deleted:
            db.session.commit()
            return False

        db.session.execute(
            insert_ignore(cls).values(
                track_id=track_id,
                user_id=user_id,
                created_at=datetime.utcnow()
            )
        )
        db.session.commit()
        return True

    @classmethod
    def count_for(cls, track_id):
        return cls.query.filter_by(track_id=track_id).count()

    @classmethod
    def exists(cls, track_id, user_id):
        return cls.query.filter_by(track_id=track_id, user_id=user_id).first() is not None
