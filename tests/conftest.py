# common pytest fixtures for the bloglist service
import pytest

from bloglist.app import create_test_app
from bloglist.auth import hash_password
from bloglist.models import Blog, User

# extensions are shared (common/extensions.py)
from common.extensions import db

INITIAL_BLOGS = [
    {"title": "React patterns", "author": "Michael Chan",
     "url": "https://reactpatterns.com/", "likes": 7},
    {"title": "Go To Statement Considered Harmful", "author": "Edsger W. Dijkstra",
     "url": "http://www.u.arizona.edu/~rubinson/copyright_violations/Go_To_Considered_Harmful.html",
     "likes": 5},
    {"title": "Canonical string reduction", "author": "Edsger W. Dijkstra",
     "url": "http://www.cs.utexas.edu/~EWD/transcriptions/EWD08xx/EWD808.html", "likes": 12},
    {"title": "First class tests", "author": "Robert C. Martin",
     "url": "http://blog.cleancoder.com/uncle-bob/2017/05/05/TestDefinitions.htmll", "likes": 10},
    {"title": "TDD harms architecture", "author": "Robert C. Martin",
     "url": "http://blog.cleancoder.com/uncle-bob/2017/03/03/TDD-Harms-Architecture.html", "likes": 0},
    {"title": "Type wars", "author": "Robert C. Martin",
     "url": "http://blog.cleancoder.com/uncle-bob/2016/05/01/TypeWars.html", "likes": 2},
]

@pytest.fixture
def app():
    app = create_test_app()
    ctx = app.app_context()
    ctx.push()
    yield app
    db.session.remove()
    db.drop_all()
    ctx.pop()

@pytest.fixture
def client(app):
    return app.test_client()

@pytest.fixture
def make_user(app):
    # store a user directly, bypassing the signup route
    def _make_user(username="root", password="sekret", name="Superuser"):
        user = User(username=username, name=name, pw_hash=hash_password(password))
        db.session.add(user)
        db.session.commit()
        return user
    return _make_user

@pytest.fixture
def login(client):
    # log in through the API and return ready-made auth headers
    def _login(username="root", password="sekret"):
        resp = client.post("/api/login", json={"username": username, "password": password})
        assert resp.status_code == 200
        return {"Authorization": f"Bearer {resp.get_json()['token']}"}
    return _login

@pytest.fixture
def seeded_blogs(app):
    # the initial blogs have no creator
    blogs = [Blog(**data) for data in INITIAL_BLOGS]
    db.session.add_all(blogs)
    db.session.commit()
    return blogs
