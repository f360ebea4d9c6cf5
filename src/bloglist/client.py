#!/usr/bin/env python3
"""
CLI client for the bloglist service.

The client mirrors what a browser front end would do:
- Signing up and logging in to obtain a bearer token
- Keeping the {token, username, name} session between invocations
- Listing, adding, liking and deleting blogs
- Logging out, which forgets the stored session
"""
from __future__ import annotations

import argparse
import getpass
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from .session import FileSessionStore, Session, SessionStore

DEFAULT_BASE_URL = os.getenv("BLOGLIST_API_URL", "http://localhost:3003")
DEFAULT_REQUEST_TIMEOUT = 10.0


class ApiError(Exception):
    """Non-2xx answer (or no answer at all) from the API."""

    def __init__(self, status: Optional[int], message: str):
        super().__init__(message)
        self.status = status
        self.message = message

    def __str__(self) -> str:
        return f"({self.status if self.status is not None else '?'}) {self.message}"


class BlogService:
    """Thin wrapper around the HTTP API."""

    def __init__(self, base_url: str = DEFAULT_BASE_URL,
                 request_timeout: float = DEFAULT_REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.request_timeout = request_timeout
        self.token: Optional[str] = None

    def set_token(self, token: Optional[str]) -> None:
        self.token = token or None

    def auth_headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def _request(self, method: str, path: str, *, use_auth: bool = False, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if use_auth:
            headers.update(self.auth_headers())
        try:
            resp = requests.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                timeout=self.request_timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            raise ApiError(None, f"request failed: {exc}") from exc

        if resp.status_code == 204:
            return None
        try:
            payload = resp.json()
        except ValueError:
            payload = None

        if not 200 <= resp.status_code < 300:
            msg = payload.get("error") if isinstance(payload, dict) else None
            raise ApiError(resp.status_code, msg or resp.text)
        return payload

    # blogs
    def get_all(self) -> List[Dict]:
        return self._request("get", "/api/blogs")

    def stats(self) -> Dict:
        return self._request("get", "/api/blogs/stats")

    def create(self, blog: Dict) -> Dict:
        return self._request("post", "/api/blogs", use_auth=True, json=blog)

    def update(self, blog_id: int, blog: Dict) -> Dict:
        return self._request("put", f"/api/blogs/{blog_id}", use_auth=True, json=blog)

    def remove(self, blog_id: int) -> None:
        self._request("delete", f"/api/blogs/{blog_id}", use_auth=True)

    # users and login
    def signup(self, username: str, name: str, password: str) -> Dict:
        return self._request("post", "/api/users",
                             json={"username": username, "name": name, "password": password})

    def login(self, username: str, password: str) -> Session:
        return self._request("post", "/api/login",
                             json={"username": username, "password": password})


@dataclass
class ClientState:
    service: BlogService
    store: SessionStore
    user: Optional[Session] = None
    messages: List[str] = field(default_factory=list)

    def restore(self) -> Optional[Session]:
        # pick up a session persisted by a previous run
        session = self.store.get()
        if session and session.get("token"):
            self.user = session
            self.service.set_token(session["token"])
        return self.user

    def login(self, username: str, password: str) -> Session:
        session = self.service.login(username, password)
        self.store.set(session)
        self.service.set_token(session["token"])
        self.user = session
        return session

    def logout(self) -> None:
        self.store.clear()
        self.service.set_token(None)
        self.user = None

    def notify(self, message: str, status: str = "info") -> None:
        line = f"[{status}] {message}"
        self.messages.append(line)
        print(line)


def _require_login(state: ClientState) -> bool:
    if state.user:
        return True
    state.notify("You need to login first.", "error")
    return False

def _format_blog(blog: Dict) -> str:
    owner = blog.get("user") or {}
    suffix = f" [added by {owner['username']}]" if owner.get("username") else ""
    return f"#{blog['id']} {blog['title']} by {blog.get('author') or 'unknown'} " \
           f"({blog['likes']} likes) {blog['url']}{suffix}"

def _read_password(args) -> str:
    return args.password if args.password is not None else getpass.getpass("Password: ")

def cmd_signup(state: ClientState, args) -> int:
    user = state.service.signup(args.username, args.name, _read_password(args))
    state.notify(f"User '{user['username']}' created")
    return 0

def cmd_login(state: ClientState, args) -> int:
    try:
        session = state.login(args.username, _read_password(args))
    except ApiError as exc:
        if exc.status == 401:
            state.notify("Wrong credentials", "error")
            return 1
        raise
    state.notify(f"Welcome {session.get('name') or session['username']}")
    return 0

def cmd_logout(state: ClientState, _args) -> int:
    state.logout()
    state.notify("Logged out")
    return 0

def cmd_whoami(state: ClientState, _args) -> int:
    if not _require_login(state):
        return 1
    state.notify(f"Logged in as {state.user['username']} ({state.user.get('name')})")
    return 0

def cmd_list(state: ClientState, _args) -> int:
    blogs = state.service.get_all()
    if not blogs:
        print("No blogs yet.")
    for blog in blogs:
        print(_format_blog(blog))
    return 0

def cmd_add(state: ClientState, args) -> int:
    if not _require_login(state):
        return 1
    blog = {"title": args.title, "author": args.author, "url": args.url}
    if args.likes is not None:
        blog["likes"] = args.likes
    created = state.service.create(blog)
    state.notify(f"Blog '{created['title']}' added")
    return 0

def cmd_like(state: ClientState, args) -> int:
    if not _require_login(state):
        return 1
    blog = next((b for b in state.service.get_all() if b["id"] == args.id), None)
    if blog is None:
        state.notify(f"Blog #{args.id} not found", "error")
        return 1
    updated = state.service.update(args.id, {
        "title": blog["title"],
        "author": blog["author"],
        "url": blog["url"],
        "likes": blog["likes"] + 1,
    })
    state.notify(f"Blog '{updated['title']}' now has {updated['likes']} likes")
    return 0

def cmd_delete(state: ClientState, args) -> int:
    if not _require_login(state):
        return 1
    state.service.remove(args.id)
    state.notify(f"Blog #{args.id} deleted")
    return 0

def cmd_stats(state: ClientState, _args) -> int:
    stats = state.service.stats()
    print(f"Total likes: {stats['total_likes']}")
    if stats["favourite_blog"]:
        print(f"Favourite blog: {_format_blog(stats['favourite_blog'])}")
        print(f"Most blogs: {stats['most_blogs']['author']} ({stats['most_blogs']['blogs']})")
        print(f"Most likes: {stats['most_likes']['author']} ({stats['most_likes']['likes']})")
    return 0

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CLI client for the bloglist service")
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help=f"API base URL (default: {DEFAULT_BASE_URL})",
    )
    parser.add_argument(
        "--request-timeout",
        type=float,
        default=DEFAULT_REQUEST_TIMEOUT,
        help="Per-request timeout in seconds",
    )
    parser.add_argument(
        "--session-file",
        default=None,
        help="Where the login session is kept between runs",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("signup", help="Create a user")
    p.add_argument("username")
    p.add_argument("--name", default=None)
    p.add_argument("--password", default=None)
    p.set_defaults(func=cmd_signup)

    p = sub.add_parser("login", help="Log in and keep the session")
    p.add_argument("username")
    p.add_argument("--password", default=None)
    p.set_defaults(func=cmd_login)

    p = sub.add_parser("logout", help="Forget the stored session")
    p.set_defaults(func=cmd_logout)

    p = sub.add_parser("whoami", help="Show the logged in user")
    p.set_defaults(func=cmd_whoami)

    p = sub.add_parser("list", help="List every blog")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("add", help="Add a blog")
    p.add_argument("title")
    p.add_argument("url")
    p.add_argument("--author", default=None)
    p.add_argument("--likes", type=int, default=None)
    p.set_defaults(func=cmd_add)

    p = sub.add_parser("like", help="Add one like to a blog")
    p.add_argument("id", type=int)
    p.set_defaults(func=cmd_like)

    p = sub.add_parser("delete", help="Delete a blog you created")
    p.add_argument("id", type=int)
    p.set_defaults(func=cmd_delete)

    p = sub.add_parser("stats", help="Show blog statistics")
    p.set_defaults(func=cmd_stats)

    return parser

def main(argv: Optional[List[str]] = None, store: Optional[SessionStore] = None) -> int:
    args = build_parser().parse_args(argv)
    if store is None:
        store = FileSessionStore(args.session_file) if args.session_file else FileSessionStore()

    state = ClientState(
        service=BlogService(args.base_url, request_timeout=args.request_timeout),
        store=store,
    )
    state.restore()

    try:
        return args.func(state, args)
    except ApiError as exc:
        state.notify(str(exc), "error")
        return 1

if __name__ == "__main__":
    sys.exit(main())
