from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from dotenv import load_dotenv
from flask_migrate import Migrate
from flask_compress import Compress
import logging

# Load environment variables early so config is available for blueprint creation
load_dotenv()

from quizhub.config import config

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
compress = Compress()


def create_app() -> Flask:
    """
    Application factory for the Flask app.
    Loads environment variables, configures the database,
    and registers blueprints.
    """
    # Re-initialize config to ensure latest .env values are loaded
    from quizhub.config import Config
    global config
    config = Config()

    # Validate configuration
    config.validate()

    app = Flask(__name__)
    app.logger.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))

    # Load configuration from config module
    app.config["SECRET_KEY"] = config.SECRET_KEY
    app.config["ENV_NAME"] = config.FLASK_ENV or "development"
    db_uri = config.SQLALCHEMY_DATABASE_URI
    app.config["SQLALCHEMY_DATABASE_URI"] = db_uri
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = config.SQLALCHEMY_TRACK_MODIFICATIONS
    app.config["SQLALCHEMY_ECHO"] = config.SQLALCHEMY_ECHO
    # Connection pooling only applies to server databases
    if db_uri.startswith("mysql"):
        app.config["SQLALCHEMY_ENGINE_OPTIONS"] = {
            "pool_size": 10,
            "pool_recycle": 3600,
            "pool_pre_ping": True,
            "max_overflow": 20,
            "connect_args": {
                "connect_timeout": 5,
                "charset": "utf8mb4",
            }
        }

    # Response compression settings
    app.config["COMPRESS_MIMETYPES"] = ['application/json']
    app.config["COMPRESS_LEVEL"] = 6
    app.config["COMPRESS_MIN_SIZE"] = 500
    app.config["SESSION_COOKIE_SECURE"] = config.SESSION_COOKIE_SECURE
    app.config["SESSION_COOKIE_HTTPONLY"] = config.SESSION_COOKIE_HTTPONLY
    app.config["SESSION_COOKIE_SAMESITE"] = config.SESSION_COOKIE_SAMESITE

    app.config["MIN_PASSWORD_LENGTH"] = config.MIN_PASSWORD_LENGTH
    app.config["RATE_LIMIT_ENABLED"] = config.RATE_LIMIT_ENABLED
    app.config["LOGIN_RATE_LIMIT"] = config.LOGIN_RATE_LIMIT
    app.config["LOGIN_RATE_WINDOW_SECONDS"] = config.LOGIN_RATE_WINDOW_SECONDS

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    compress.init_app(app)

    from quizhub.security import init_security
    init_security(app)

    from quizhub.common.errors import register_error_handlers, Unauthenticated
    register_error_handlers(app)

    @login_manager.user_loader
    def load_user(user_id):
        from quizhub.auth.models import User
        try:
            return db.session.get(User, int(user_id))
        except (ValueError, TypeError):
            return None

    @login_manager.unauthorized_handler
    def unauthorized():
        raise Unauthenticated()

    @app.route("/health")
    def health():
        return jsonify({
            'success': True,
            'message': 'Server is running',
            'environment': app.config["ENV_NAME"],
        }), 200

    # Register blueprints
    from quizhub.auth import auth_bp
    app.register_blueprint(auth_bp)

    from quizhub.quiz import quiz_bp
    app.register_blueprint(quiz_bp)

    from quizhub.seeds import register_commands
    register_commands(app)

    # Create tables if they do not exist
    with app.app_context():
        from quizhub.auth.models import User  # noqa: F401
        from quizhub.quiz.models import Quiz, Question, Submission  # noqa: F401
        db.create_all()

    app.logger.info(f"QuizHub started ({app.config['ENV_NAME']})")
    return app
