"""
Client-side session storage.

A session is the ``{token, username, name}`` object returned by the
login endpoint. Stores only know how to get, set and clear it, so the
client can keep it in memory (tests) or on disk between invocations.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Optional

SESSION_KEY = "loggedBlogappUser"
DEFAULT_SESSION_FILE = Path(
    os.getenv("BLOGLIST_SESSION_FILE", Path.home() / ".bloglist" / "session.json")
)

Session = Dict[str, Optional[str]]


class SessionStore:
    """Interface shared by every session store."""

    def get(self) -> Optional[Session]:
        raise NotImplementedError

    def set(self, session: Session) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class MemorySessionStore(SessionStore):
    def __init__(self, session: Optional[Session] = None):
        self._session = session

    def get(self) -> Optional[Session]:
        return self._session

    def set(self, session: Session) -> None:
        self._session = dict(session)

    def clear(self) -> None:
        self._session = None


class FileSessionStore(SessionStore):
    """Keeps the session as JSON under ``SESSION_KEY`` in a small file."""

    def __init__(self, path: Path | str = DEFAULT_SESSION_FILE):
        self.path = Path(path)

    def _read_all(self) -> Dict:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except ValueError:
            # corrupt file, behave as if nothing was stored
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: Dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)
        # the token is a credential
        os.chmod(self.path, 0o600)

    def get(self) -> Optional[Session]:
        return self._read_all().get(SESSION_KEY)

    def set(self, session: Session) -> None:
        data = self._read_all()
        data[SESSION_KEY] = dict(session)
        self._write_all(data)

    def clear(self) -> None:
        data = self._read_all()
        if data.pop(SESSION_KEY, None) is not None:
            self._write_all(data)
