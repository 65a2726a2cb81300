from cypher.models.user import User, UserRole
from cypher.models.track import Track
from cypher.models.track_like import TrackLike
from cypher.models.playlist import Playlist, PlaylistTrack
from cypher.models.comment import Comment
from cypher.models.notification import Notification, NotificationType
