import logging

import click
from flask import Flask, jsonify

from auth import bp as auth_bp, create_user, login_manager
from config import Config
from errors import PostError, StorageFailure, ValidationFailed
from models import db
from validation import make_clean_check
from views import bp as posts_bp

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s %(message)s"


def configure_logging(app):
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(format=LOG_FORMAT, level=level)
    app.logger.setLevel(level)


def register_error_handlers(app):
    @app.errorhandler(PostError)
    def handle_post_error(e):
        if isinstance(e, StorageFailure):
            app.logger.error("storage failure: %s", e.__cause__ or e)
        elif isinstance(e, ValidationFailed):
            app.logger.info("validation failed: %s", e.codes())
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify(message="Not found."), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(e):
        return jsonify(message="Method not allowed."), 405


def register_commands(app):
    @app.cli.command("init-db")
    def init_db_command():
        """Create the users and posts tables."""
        db.create_all()
        click.echo("Database initialized.")

    @app.cli.command("create-user")
    @click.argument("name")
    @click.argument("email")
    @click.argument("password")
    def create_user_command(name, email, password):
        """Create a user who can sign in and write posts."""
        try:
            user = create_user(name, email, password)
        except ValidationFailed as e:
            raise click.ClickException("; ".join(
                msg for msgs in e.messages().values() for msg in msgs
            ))
        click.echo(f"Created user {user.id} <{user.email}>.")


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app)

    db.init_app(app)
    login_manager.init_app(app)

    # Swappable content policy used by the post validation
    app.extensions["is_clean"] = make_clean_check(app.config["DISALLOWED_TERMS"])

    app.register_blueprint(auth_bp)
    app.register_blueprint(posts_bp)
    register_error_handlers(app)
    register_commands(app)
    return app


# Local dev entrypoint (production: gunicorn "app:create_app()")
if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
    app.run(debug=True, host="127.0.0.1", port=5000)
