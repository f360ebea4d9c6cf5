# generic app factory

from flask import Flask

# create a Flask application with the following parameters:
#   name: import name handed to Flask
#   config_obj: A class instance containing configuration parameters
#   extensions: A list of extension objects to init with this app
#   blueprints: A list of (blueprint, url_prefix) pairs to register
#   init_app_context_steps: A list of things to do with this app's context
def create_flask_app(*, name, config_obj, extensions, blueprints,
                     init_app_context_steps):
    # create app and configure it
    app = Flask(name)
    app.config.from_object(config_obj)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO").upper())

    # init all the extensions
    for ext in extensions:
        ext.init_app(app)

    # perform initialization steps in app's context
    with app.app_context():
        for step in init_app_context_steps:
            step(app)

    # register blueprints under their prefix
    for bp, url_prefix in blueprints:
        app.register_blueprint(bp, url_prefix=url_prefix)

    # return app
    return app
