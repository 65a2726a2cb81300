from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from cypher.services.s3_service import S3Service

db = SQLAlchemy()
jwt = JWTManager()
storage = S3Service()
