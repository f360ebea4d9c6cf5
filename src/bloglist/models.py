"""Database models for the bloglist service."""

from __future__ import annotations
from typing import Optional
from sqlalchemy import CheckConstraint, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from common.extensions import db


class User(db.Model):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(80), unique=True, nullable=False, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    pw_hash: Mapped[str] = mapped_column(String(128), nullable=False)

    # back-reference filled in when a blog is created
    blogs: Mapped[list["Blog"]] = relationship(
        "Blog", back_populates="user", order_by="Blog.id"
    )

    def __init__(self, username: str, pw_hash: str, name: str | None = None):
        self.username = username
        self.name = name
        self.pw_hash = pw_hash

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "blogs": [blog.to_dict(include_user=False) for blog in self.blogs],
        }


class Blog(db.Model):
    __tablename__ = "blogs"
    __table_args__ = (
        CheckConstraint("likes >= 0", name="ck_blogs_likes_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # owner, optional so that blogs without a creator can exist
    user_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True, index=True
    )
    user: Mapped[Optional[User]] = relationship("User", back_populates="blogs")

    def __init__(self,
        title: str,
        url: str,
        author: str | None = None,
        likes: int = 0,
        user: User | None = None,
    ):
        self.title = title
        self.url = url
        self.author = author
        self.likes = likes
        self.user = user

    def is_owned_by(self, user: User) -> bool:
        return self.user_id is None or self.user_id == user.id

    def to_dict(self, include_user: bool = True) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "url": self.url,
            "likes": self.likes,
        }
        if include_user:
            data["user"] = None if self.user is None else {
                "id": self.user.id,
                "username": self.user.username,
                "name": self.user.name,
            }
        return data
