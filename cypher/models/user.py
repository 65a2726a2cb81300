from cypher.extensions.extension import db
from datetime import datetime
from sqlalchemy import Uuid
from werkzeug.security import generate_password_hash, check_password_hash
import enum
import uuid


class UserRole(enum.Enum):
    listener = "listener"
    creator = "creator"


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = db.Column(db.String(120), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.Enum(UserRole), nullable=False, default=UserRole.listener)
    artist_name = db.Column(db.String(100), unique=True, nullable=True)
    bio = db.Column(db.Text, nullable=True)
    profile_picture_key = db.Column(db.String, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tracks = db.relationship('Track', backref='artist', lazy='dynamic')
    playlists = db.relationship('Playlist', backref='owner', lazy='dynamic')

    @property
    def password(self):
        raise AttributeError('password is not a readable attribute')

    @password.setter
    def password(self, password):
        self.password_hash = generate_password_hash(password)

    def verify_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def is_creator(self):
        return self.role == UserRole.creator

    @classmethod
    def find_by_email(cls, email):
        return cls.query.filter_by(email=email).first()

    def to_dict(self):
        return {
            'id': str(self.id),
            'email': self.email,
            'role': self.role.value,
            'artist_name': self.artist_name,
            'bio': self.bio,
            'profile_picture_key': self.profile_picture_key,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<User {self.email}>'
