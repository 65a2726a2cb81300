import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


def _database_url(*names, require_ssl=False):
    url = next((os.environ.get(name) for name in names if os.environ.get(name)), '')
    if not url:
        return url
    # Heroku style URLs are not accepted by SQLAlchemy
    url = url.replace('postgres://', 'postgresql://')
    if require_ssl and 'sslmode=' not in url:
        url = f"{url}{'?' if '?' not in url else '&'}sslmode=require"
    return url


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY') or 'dev-key-for-testing'
    DEBUG = False
    TESTING = False
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = _database_url('DATABASE_URL') or 'sqlite:///cypher.db'

    # Tokens are signed with a shared secret and expire after an hour
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY') or SECRET_KEY
    JWT_ALGORITHM = 'HS256'
    JWT_TOKEN_LOCATION = ['headers']
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        seconds=int(os.environ.get('JWT_ACCESS_TOKEN_EXPIRES', 3600))
    )

    # Object storage
    AWS_REGION = os.environ.get('AWS_REGION', 'eu-central-1')
    AWS_ACCESS_KEY_ID = os.environ.get('AWS_ACCESS_KEY_ID')
    AWS_SECRET_ACCESS_KEY = os.environ.get('AWS_SECRET_ACCESS_KEY')
    S3_BUCKET_NAME = os.environ.get('S3_BUCKET_NAME', 'cypher-media')
    S3_ENDPOINT_URL = os.environ.get('S3_ENDPOINT_URL')
    SIGNED_URL_EXPIRES = int(os.environ.get('SIGNED_URL_EXPIRES', 3600))

    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', 100 * 1024 * 1024))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    PORT = int(os.environ.get('PORT', 3000))


class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = (
        _database_url('DEVELOPMENT_DATABASE_URL', 'DATABASE_URL') or 'sqlite:///cypher.db'
    )


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = _database_url('TESTING_DATABASE_URL') or 'sqlite://'
    JWT_SECRET_KEY = 'testing-secret-key-with-enough-length-for-hs256'
    S3_BUCKET_NAME = 'cypher-test'


class ProductionConfig(Config):
    SQLALCHEMY_DATABASE_URI = _database_url(
        'PRODUCTION_DATABASE_URL', 'DATABASE_URL', require_ssl=True
    )


class StagingConfig(Config):
    SQLALCHEMY_DATABASE_URI = _database_url('DATABASE_URL', require_ssl=True)


config_by_name = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'staging': StagingConfig,
    'default': DevelopmentConfig
}
