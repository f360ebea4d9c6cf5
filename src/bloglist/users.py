"""Users HTTP routes (signup and listing)."""
from __future__ import annotations
from enum import StrEnum
from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import IntegrityError
from common.extensions import db
from .auth import hash_password
from .models import User

bp = Blueprint("users", __name__)

MIN_CREDENTIAL_LENGTH = 3

class SignupError(StrEnum):
    TOO_SHORT = "username and password should be at least 3 characters"
    NOT_UNIQUE = "expected username to be unique"

# Utility function to validate signup credentials
def _validate_credentials(username, password) -> SignupError | None:
    if not isinstance(username, str) or not isinstance(password, str):
        return SignupError.TOO_SHORT
    if len(username) < MIN_CREDENTIAL_LENGTH or len(password) < MIN_CREDENTIAL_LENGTH:
        return SignupError.TOO_SHORT
    return None

# 1. GET /api/users
@bp.get("")
def list_users():
    users = db.session.execute(db.select(User).order_by(User.id)).scalars().all()
    return jsonify([user.to_dict() for user in users]), 200

# 2. POST /api/users (signup)
@bp.post("")
def create_user():
    payload = request.get_json(silent=True) or {}
    username = payload.get("username")
    password = payload.get("password")
    name = payload.get("name")

    result = _validate_credentials(username, password)
    if result:
        return jsonify({"error": result.value}), 400
    if name is not None and not isinstance(name, str):
        return jsonify({"error": "name must be a string"}), 400

    existing = db.session.execute(
        db.select(User.id).filter_by(username=username)
    ).first()
    if existing is not None:
        return jsonify({"error": SignupError.NOT_UNIQUE.value}), 400

    # the raw password goes no further than this point
    user = User(username=username, name=name, pw_hash=hash_password(password))
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # lost a race against another signup with the same username
        db.session.rollback()
        return jsonify({"error": SignupError.NOT_UNIQUE.value}), 400

    current_app.logger.info("User %s created", user.username)
    return jsonify(user.to_dict()), 201
