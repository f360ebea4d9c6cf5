"""
Blog HTTP routes.

Reads are public; create, update and delete need a bearer token and
update/delete are restricted to the blog's creator (blogs without a
creator can be changed by any authenticated user).
"""
from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import current_user, jwt_required
from sqlalchemy.orm import selectinload

from common.extensions import db
from .errors import BlogNotFoundError, MalformedIdError
from .list_helper import blog_stats
from .models import Blog

bp = Blueprint("blogs", __name__)

# largest value a SQLite INTEGER column holds
MAX_INTEGER = 2**63 - 1


# --- Input Validation Helpers ---

def _as_bounded_int(value: str) -> int | None:
    """ASCII digit strings within the INTEGER range, None otherwise."""
    value = value.strip()
    if not (value.isascii() and value.isdigit()) or len(value) > len(str(MAX_INTEGER)):
        return None
    number = int(value)
    return number if number <= MAX_INTEGER else None

def _parse_id(value: str) -> int:
    """Path ids are digit-only strings."""
    blog_id = _as_bounded_int(value)
    if blog_id is None:
        raise MalformedIdError(f"{value!r} is not a blog id")
    return blog_id

def _get_blog_or_raise(value: str) -> Blog:
    blog = db.session.get(Blog, _parse_id(value))
    if blog is None:
        raise BlogNotFoundError(f"Blog {value} not found")
    return blog

def _validate_likes(value) -> int:
    """Absent likes mean 0, otherwise a non-negative integer is required."""
    if value is None or value == "":
        return 0
    # bool is an int subclass but never a like count
    if isinstance(value, bool):
        raise ValueError("likes must be a non-negative integer")
    if isinstance(value, str):
        value = _as_bounded_int(value)
    if isinstance(value, int) and 0 <= value <= MAX_INTEGER:
        return value
    raise ValueError("likes must be a non-negative integer")

def _read_blog_payload(payload: dict) -> dict:
    """Extract and validate the writable blog fields."""
    title = payload.get("title")
    url = payload.get("url")
    if not isinstance(title, str) or not title.strip():
        raise ValueError("title is required")
    if not isinstance(url, str) or not url.strip():
        raise ValueError("url is required")

    author = payload.get("author")
    if author is not None and not isinstance(author, str):
        raise ValueError("author must be a string")

    return {
        "title": title,
        "author": author,
        "url": url,
        "likes": _validate_likes(payload.get("likes")),
    }


# --- Core API Endpoints ---

def _all_blogs() -> list[Blog]:
    # creators are loaded in one extra query, not one per blog
    return db.session.execute(
        db.select(Blog).options(selectinload(Blog.user)).order_by(Blog.id)
    ).scalars().all()


@bp.get("")
def list_blogs():
    blogs = _all_blogs()
    return jsonify([blog.to_dict() for blog in blogs]), 200


@bp.get("/stats")
def stats():
    """Aggregate statistics over every stored blog."""
    blogs = _all_blogs()
    return jsonify(blog_stats(blog.to_dict() for blog in blogs)), 200


@bp.get("/<blog_id>")
def get_blog(blog_id: str):
    return jsonify(_get_blog_or_raise(blog_id).to_dict()), 200


@bp.post("")
@jwt_required()
def create_blog():
    payload = request.get_json(silent=True) or {}
    try:
        fields = _read_blog_payload(payload)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    blog = Blog(**fields)
    # keep the creator's back-reference list in sync
    current_user.blogs.append(blog)
    db.session.add(blog)
    db.session.commit()

    current_app.logger.info(f"Blog {blog.id} created by {current_user.username}")
    return jsonify(blog.to_dict()), 201


@bp.put("/<blog_id>")
@jwt_required()
def update_blog(blog_id: str):
    blog = _get_blog_or_raise(blog_id)
    if not blog.is_owned_by(current_user):
        current_app.logger.warning(
            f"User {current_user.username} tried to update blog {blog.id}")
        return jsonify({"error": "only the creator can update a blog"}), 401

    payload = request.get_json(silent=True) or {}
    try:
        fields = _read_blog_payload(payload)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    for key, value in fields.items():
        setattr(blog, key, value)
    db.session.commit()

    current_app.logger.info(f"Blog {blog.id} updated by {current_user.username}")
    # updates answer 201, not 200
    return jsonify(blog.to_dict()), 201


@bp.delete("/<blog_id>")
@jwt_required()
def delete_blog(blog_id: str):
    blog = _get_blog_or_raise(blog_id)
    if not blog.is_owned_by(current_user):
        current_app.logger.warning(
            f"User {current_user.username} tried to delete blog {blog.id}")
        return jsonify({"error": "only the creator can delete a blog"}), 401

    db.session.delete(blog)
    db.session.commit()

    current_app.logger.info(f"Blog {blog_id} deleted by {current_user.username}")
    return "", 204
