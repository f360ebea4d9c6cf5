# HTTP endpoint for login
from flask import Blueprint, current_app, jsonify, request

from common.extensions import db
from .auth import check_password, issue_token
from .models import User

bp = Blueprint("login", __name__)

# login and hand out a bearer token
@bp.post("")
def login():
    # extract stuff
    payload = request.get_json(silent=True) or {}
    username = payload.get("username")
    password = payload.get("password")

    # check if everything is supplied
    if not isinstance(username, str) or not isinstance(password, str) \
            or not username or not password:
        return jsonify({"error": "missing username or password"}), 400

    # unknown user and wrong password get the same answer
    user = db.session.execute(
        db.select(User).filter_by(username=username)
    ).scalar_one_or_none()
    if user is None or not check_password(password, user.pw_hash):
        current_app.logger.warning("Failed login for %s", username)
        return jsonify({"error": "invalid username or password"}), 401

    # generate token and return it with the session details
    token = issue_token(user)
    current_app.logger.info("User %s logged in", user.username)
    return jsonify({"token": token, "username": user.username, "name": user.name}), 200
