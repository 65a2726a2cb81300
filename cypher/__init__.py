from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate
from werkzeug.exceptions import HTTPException
from cypher.extensions.extension import db, jwt, storage

migrate = Migrate()


def create_app(config_name='default', config_overrides=None):
    from cypher.config import config_by_name

    app = Flask(__name__)
    CORS(app)

    # Configuration is read once here and handed to every extension
    app.config.from_object(config_by_name[config_name])
    if config_overrides:
        app.config.update(config_overrides)

    db.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    storage.init_app(app)

    # Import JWT utils to register the loaders
    from cypher.utils import jwt_utils  # noqa: F401

    from cypher.routes.auth.auth import auth_bp
    from cypher.routes.user.user import user_bp
    from cypher.routes.tracks.tracks import tracks_bp
    from cypher.routes.tracks.likes import likes_bp
    from cypher.routes.tracks.comments import comments_bp
    from cypher.routes.playlists.playlists import playlists_bp
    from cypher.routes.notifications.notifications import notifications_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(tracks_bp)
    app.register_blueprint(likes_bp)
    app.register_blueprint(comments_bp)
    app.register_blueprint(playlists_bp)
    app.register_blueprint(notifications_bp)

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({'message': e.description}), e.code

    @app.route('/')
    def index():
        return "Welcome to the Cypher API"

    from cypher import models  # noqa: F401

    # Create database tables
    with app.app_context():
        db.create_all()

    return app
