# password hashing, token issuing and token verification callbacks
from flask import current_app, jsonify
from flask_jwt_extended import create_access_token

from common.extensions import bcrypt, db, jwt
from .models import User

### password helpers

# use bcrypt to generate a salted password hash
def hash_password(password: str) -> str:
    return bcrypt.generate_password_hash(password).decode("utf-8")

# test a password against a stored hash
def check_password(password: str, pw_hash: str) -> bool:
    return bcrypt.check_password_hash(pw_hash, password)

### token helpers

# sign a token carrying the user id (also as subject) and the username
def issue_token(user: User) -> str:
    return create_access_token(
        identity=str(user.id),
        additional_claims={"username": user.username, "id": user.id},
    )

### Flask-JWT-Extended callbacks (registered on import)

# load the user named by the token, exposed to routes as current_user
@jwt.user_lookup_loader
def _load_user(_jwt_header, jwt_data):
    try:
        user_id = int(jwt_data["sub"])
    except (KeyError, TypeError, ValueError):
        return None
    return db.session.get(User, user_id)

# token is well formed but its user no longer exists
@jwt.user_lookup_error_loader
def _unknown_user(_jwt_header, jwt_data):
    current_app.logger.warning("Token for unknown user %s", jwt_data.get("sub"))
    return jsonify({"error": "token invalid"}), 401

@jwt.unauthorized_loader
def _missing_token(reason: str):
    current_app.logger.info("Rejected request without token: %s", reason)
    return jsonify({"error": "token missing"}), 401

@jwt.invalid_token_loader
def _invalid_token(reason: str):
    current_app.logger.info("Rejected invalid token: %s", reason)
    return jsonify({"error": "token invalid"}), 401

@jwt.expired_token_loader
def _expired_token(_jwt_header, _jwt_payload):
    return jsonify({"error": "token expired"}), 401
