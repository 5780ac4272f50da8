
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from .config import Config
from .logging import configure_logging, get_logger

db = SQLAlchemy()


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    configure_logging(app.config["LOG_LEVEL"])

    @app.route("/healthz", methods=["GET"])
    def healthz():
        return "OK", 200

    db.init_app(app)

    # Ensure tables exist
    with app.app_context():
        from . import models  # noqa
        db.create_all()

    # Blueprints
    from .kitchen.routes import kitchen_bp
    from .delivery.routes import delivery_bp
    from .api.routes import api_bp
    app.register_blueprint(kitchen_bp)
    app.register_blueprint(delivery_bp)
    app.register_blueprint(api_bp, url_prefix="/api")

    @app.route("/")
    def index():
        from flask import redirect, url_for
        return redirect(url_for("kitchen.kitchen"))

    get_logger(__name__).info("orderboard ready (poll every {}s)", app.config["POLL_INTERVAL_SECONDS"])
    return app
