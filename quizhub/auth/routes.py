from flask import current_app, jsonify
from flask_login import login_user, logout_user, current_user
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from quizhub import db
from quizhub.config import config
from quizhub.auth import auth_bp
from quizhub.auth.models import User
from quizhub.auth.utils import hash_password, is_valid_email, validate_password, verify_password
from quizhub.common.decorators import api_login_required, json_body
from quizhub.common.errors import ValidationError, Unauthenticated
from quizhub.security import SecurityLogger, rate_limit


def _text_field(data: dict, name: str) -> str:
    """String value of a JSON field; missing or null reads as an empty string."""
    value = data.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{name.capitalize()} must be a string")
    return value


@auth_bp.route("/", methods=["GET"])
def auth_root():
    """Simple health/info endpoint for auth API."""
    base_path = config.AUTH_API_PREFIX
    return jsonify(
        {
            "success": True,
            "message": "Auth API is running",
            "endpoints": [
                f"{base_path}/register",
                f"{base_path}/login",
                f"{base_path}/logout",
                f"{base_path}/me",
            ],
        }
    ), 200


@auth_bp.route("/register", methods=["POST"])
def register():
    data = json_body()

    name = _text_field(data, "name").strip()
    email = _text_field(data, "email").strip().lower()
    password = _text_field(data, "password")
    role = (_text_field(data, "role") or config.DEFAULT_USER_ROLE).strip().lower()

    if not name or not email or not password:
        raise ValidationError("Name, email, and password are required")

    if not is_valid_email(email):
        raise ValidationError("Please include a valid email")

    if role not in config.VALID_USER_ROLES:
        raise ValidationError(f"Invalid role. Must be one of: {', '.join(config.VALID_USER_ROLES)}")

    ok, error = validate_password(password, current_app.config["MIN_PASSWORD_LENGTH"])
    if not ok:
        raise ValidationError(error)

    if User.query.filter_by(email=email).first():
        raise ValidationError("User with this email already exists")

    user = User(name=name, email=email, password_hash=hash_password(password), role=role)
    try:
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration for the same email
        db.session.rollback()
        raise ValidationError("User with this email already exists")
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error while registering user")
        raise

    login_user(user, remember=True)
    current_app.logger.info(f"Registered user {user.id} ({user.role})")
    return jsonify({'success': True, 'data': user.to_dict()}), 201


@auth_bp.route("/login", methods=["POST"])
@rate_limit()
def login():
    data = json_body()
    email = _text_field(data, "email").strip().lower()
    password = _text_field(data, "password")
    remember = bool(data.get("remember", True))

    if not email or not password:
        raise ValidationError("Please provide email and password")

    user = User.query.filter_by(email=email).first()
    if not user or not verify_password(password, user.password_hash):
        SecurityLogger.log_failed_login(email)
        raise Unauthenticated("Invalid credentials")

    login_user(user, remember=remember)
    SecurityLogger.log_successful_login(user.id, user.email)
    return jsonify({'success': True, 'data': user.to_dict()}), 200


@auth_bp.route("/logout", methods=["POST"])
@api_login_required
def logout_route():
    """Logout route."""
    logout_user()
    return jsonify({'success': True, 'message': 'User logged out successfully'}), 200


@auth_bp.route("/me", methods=["GET"])
@api_login_required
def me():
    return jsonify({'success': True, 'data': current_user.to_dict()}), 200
