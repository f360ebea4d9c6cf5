"""
Locust suite for the bloglist API.

Coverage:
- Users: signup, listing.
- Login: happy path and rejected credentials.
- Blogs: list, stats, single blog, create, like (update) and delete,
  plus the malformed id and non-owner paths.

Configuration (env vars):
- BLOGLIST_URL: base URL (default: http://localhost:3003). Override with `-H` as usual.
- LOCUST_REQUEST_TIMEOUT: seconds per request (default 8).
"""
from __future__ import annotations

import os
import random
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from locust import HttpUser, between, task

# ---- Configuration ----

BLOGLIST_URL = os.getenv("BLOGLIST_URL", "http://localhost:3003")
REQUEST_TIMEOUT = float(os.getenv("LOCUST_REQUEST_TIMEOUT", "8"))

AUTHORS = ["Michael Chan", "Edsger W. Dijkstra", "Robert C. Martin", "Ada Lovelace"]


# ---- Shared state helpers ----

@dataclass
class WriterCtx:
    username: str
    password: str
    name: str
    token: Optional[str] = None
    blog_ids: List[int] = field(default_factory=list)


writers_lock = threading.Lock()
writers_registry: List[WriterCtx] = []


def _rand_username(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


# ---- Locust user ----


class BloglistUser(HttpUser):
    """Each Locust user signs up one writer and works with its blogs."""

    host = BLOGLIST_URL
    wait_time = between(0.5, 2.0)

    def on_start(self) -> None:
        self.writer = WriterCtx(
            username=_rand_username("writer"),
            password="Passw0rd!",
            name=random.choice(AUTHORS),
        )
        self._signup_login(self.writer)
        with writers_lock:
            writers_registry.append(self.writer)

    # ---- HTTP helpers ----

    def _request(
        self,
        method: str,
        path: str,
        *,
        writer: Optional[WriterCtx] = None,
        name: Optional[str] = None,
        expected: Optional[Tuple[int, ...]] = None,
        **kwargs,
    ):
        headers = kwargs.pop("headers", {}) or {}
        if writer and writer.token:
            headers.setdefault("Authorization", f"Bearer {writer.token}")
        kwargs.setdefault("timeout", REQUEST_TIMEOUT)
        with self.client.request(
            method, path, headers=headers, name=name, catch_response=True, **kwargs
        ) as resp:
            ok_codes = expected or tuple(range(200, 300))
            if resp.status_code in ok_codes:
                resp.success()
            else:
                resp.failure(f"Unexpected status {resp.status_code}")
            return resp

    def _safe_json(self, resp) -> Dict:
        try:
            return resp.json() if resp and resp.content else {}
        except ValueError:
            return {}

    def _signup_login(self, writer: WriterCtx) -> None:
        self._request(
            "POST",
            "/api/users",
            json={"username": writer.username, "name": writer.name, "password": writer.password},
            name="users_signup",
        )
        resp = self._request(
            "POST",
            "/api/login",
            json={"username": writer.username, "password": writer.password},
            name="login",
        )
        if resp and resp.ok:
            writer.token = self._safe_json(resp).get("token")

    def _pick_other_writer(self) -> Optional[WriterCtx]:
        with writers_lock:
            candidates = [w for w in writers_registry if w.blog_ids and w is not self.writer]
        if not candidates:
            return None
        return random.choice(candidates)

    # ---- Tasks ----

    @task(5)
    def read_blogs(self) -> None:
        self._request("GET", "/api/blogs", name="blogs_list")
        self._request("GET", "/api/blogs/stats", name="blogs_stats")

    @task(1)
    def read_users(self) -> None:
        self._request("GET", "/api/users", name="users_list")

    @task(3)
    def create_blog(self) -> None:
        resp = self._request(
            "POST",
            "/api/blogs",
            writer=self.writer,
            json={
                "title": f"Load test {uuid.uuid4().hex[:6]}",
                "author": self.writer.name,
                "url": "https://example.com/load",
                "likes": random.randint(0, 20),
            },
            name="blogs_create",
        )
        blog_id = self._safe_json(resp).get("id")
        if blog_id is not None:
            self.writer.blog_ids.append(blog_id)

    @task(2)
    def like_blog(self) -> None:
        if not self.writer.blog_ids:
            return
        blog_id = random.choice(self.writer.blog_ids)
        resp = self._request("GET", f"/api/blogs/{blog_id}", name="blogs_get")
        blog = self._safe_json(resp)
        if not blog:
            return
        self._request(
            "PUT",
            f"/api/blogs/{blog_id}",
            writer=self.writer,
            json={
                "title": blog["title"],
                "author": blog["author"],
                "url": blog["url"],
                "likes": blog["likes"] + 1,
            },
            name="blogs_like",
            expected=(201,),
        )

    @task(1)
    def delete_blog(self) -> None:
        if not self.writer.blog_ids:
            return
        blog_id = self.writer.blog_ids.pop()
        self._request("DELETE", f"/api/blogs/{blog_id}", writer=self.writer,
                      name="blogs_delete", expected=(204,))
        # second delete of the same id must not succeed again
        self._request("DELETE", f"/api/blogs/{blog_id}", writer=self.writer,
                      name="blogs_delete_again", expected=(404,))

    @task(1)
    def error_paths(self) -> None:
        self._request("GET", "/api/blogs/not-an-id", name="blogs_malformed_id",
                      expected=(400,))
        self._request(
            "POST",
            "/api/login",
            json={"username": self.writer.username, "password": "wrong"},
            name="login_rejected",
            expected=(401,),
        )
        other = self._pick_other_writer()
        if other and other.blog_ids:
            self._request("DELETE", f"/api/blogs/{random.choice(other.blog_ids)}",
                          writer=self.writer, name="blogs_delete_not_owner",
                          expected=(401, 404))
