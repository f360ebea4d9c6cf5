# app factory for the bloglist service
from flask import Flask

from .config import Config, TestConfig
from common.app_factory import create_flask_app
from common.extensions import bcrypt, db, jwt
from . import errors
from .blogs import bp as blogs_blueprint
from .login import bp as login_blueprint
from .users import bp as users_blueprint

# flask app creation generic function
def _create_app(config_object) -> Flask:
    return create_flask_app(
        name=__name__,
        config_obj=config_object,
        extensions=(db, bcrypt, jwt, errors),
        blueprints=(
            (blogs_blueprint, "/api/blogs"),
            (users_blueprint, "/api/users"),
            (login_blueprint, "/api/login"),
        ),
        init_app_context_steps=(lambda _: db.create_all(),),
    )

# create a normal config app
def create_app() -> Flask:
    return _create_app(Config())

# create a test config app
def create_test_app() -> Flask:
    return _create_app(TestConfig())

# main Flask entrypoint
if __name__ == "__main__":  # pragma: no cover
    app = create_app()
    app.run(host="0.0.0.0", port=3003) # nosec
