import io
import logging
import mimetypes
import uuid
import boto3
from botocore.exceptions import BotoCoreError, ClientError
from werkzeug.utils import secure_filename
from cypher.errors import StorageError

logger = logging.getLogger(__name__)

TRACKS_PREFIX = 'tracks/'
COVERS_PREFIX = 'covers/'
PROFILE_PICTURE_PREFIX = 'profile-pic-'


class S3Service:
    """Thin gateway over the S3 client.

    Media bytes only pass through the API on upload. Reads go through
    presigned URLs handed to the client.
    """

    def __init__(self, app=None):
        self.s3 = None
        self.bucket_name = None
        self.default_ttl = 3600
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.s3 = boto3.client(
            's3',
            aws_access_key_id=app.config.get('AWS_ACCESS_KEY_ID'),
            aws_secret_access_key=app.config.get('AWS_SECRET_ACCESS_KEY'),
            region_name=app.config.get('AWS_REGION'),
            endpoint_url=app.config.get('S3_ENDPOINT_URL')
        )
        self.bucket_name = app.config['S3_BUCKET_NAME']
        self.default_ttl = app.config.get('SIGNED_URL_EXPIRES', 3600)
        app.extensions['s3'] = self

    @staticmethod
    def build_key(filename, prefix=''):
        # Caller owned uniqueness: random id plus the original name
        name = secure_filename(filename or '') or 'upload'
        return f"{prefix}{uuid.uuid4()}-{name}"

    def put_object(self, key, body, content_type=None):
        if content_type is None:
            content_type = mimetypes.guess_type(key)[0] or 'application/octet-stream'
        if isinstance(body, (bytes, bytearray)):
            body = io.BytesIO(body)
        try:
            self.s3.upload_fileobj(
                body,
                self.bucket_name,
                Key=key,
                ExtraArgs={'ContentType': content_type}
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError() from e
        logger.info(f"Stored object {key} ({content_type})")
        return key

    def upload_file(self, file, prefix):
        """Store an uploaded werkzeug file under a fresh key and return the key."""
        key = self.build_key(file.filename, prefix)
        content_type = file.mimetype or mimetypes.guess_type(file.filename)[0]
        return self.put_object(key, file.stream, content_type)

    def get_signed_url(self, key, ttl=None):
        try:
            return self.s3.generate_presigned_url(
                'get_object',
                Params={'Bucket': self.bucket_name, 'Key': key},
                ExpiresIn=ttl or self.default_ttl
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError() from e

    def delete_object(self, key):
        try:
            self.s3.delete_object(Bucket=self.bucket_name, Key=key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError() from e
        logger.info(f"Deleted object {key}")

    def delete_quietly(self, *keys):
        """Delete objects after the database already moved on.

        There is no compensation at this point, so a failure only leaves an
        orphaned object behind and is logged.
        """
        for key in keys:
            if not key:
                continue
            try:
                self.delete_object(key)
            except StorageError as e:
                logger.warning(f"Could not delete orphaned object {key}: {e.__cause__}")
