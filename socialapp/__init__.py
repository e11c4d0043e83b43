from flask import Flask

from socialapp.config import Config
from socialapp.db import db
from socialapp.errors import register_error_handlers
from socialapp.extensions.extensions import cors, jwt, ma
from socialapp.utils.logger import configure_logging


def create_app(config_class=Config, **overrides):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config.update(overrides)

    configure_logging(app)

    db.init_app(app)
    jwt.init_app(app)
    ma.init_app(app)
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ALLOWED_ORIGINS"]}},
    )

    # Registers the user lookup callback on the JWT manager.
    import socialapp.security  # noqa: F401

    from socialapp.routes.auth_routes import auth_bp
    from socialapp.routes.main_routes import main_bp
    from socialapp.routes.message_routes import message_bp
    from socialapp.routes.notification_routes import notification_bp
    from socialapp.routes.post_routes import post_bp
    from socialapp.routes.profile_routes import profile_bp
    from socialapp.routes.user_routes import user_bp

    for blueprint in (
        auth_bp,
        profile_bp,
        user_bp,
        post_bp,
        message_bp,
        notification_bp,
        main_bp,
    ):
        app.register_blueprint(blueprint, url_prefix="/api")

    register_error_handlers(app)

    with app.app_context():
        import socialapp.models.user_model  # noqa: F401
        import socialapp.models.follow_model  # noqa: F401
        import socialapp.models.post_model  # noqa: F401
        import socialapp.models.like_model  # noqa: F401
        import socialapp.models.comment_model  # noqa: F401
        import socialapp.models.message_model  # noqa: F401
        import socialapp.models.notification_model  # noqa: F401

        db.create_all()

    return app
