"""Session login for the post endpoints: register, login, logout."""
import logging

from flask import Blueprint, flash, redirect, url_for
from flask_login import LoginManager, current_user, login_user, logout_user
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from errors import StorageFailure, ValidationFailed
from models import User, db
from validation import INVALID_TYPE, MISSING_FIELD, TOO_LONG, FieldError
from views import request_payload

log = logging.getLogger(__name__)

bp = Blueprint("auth", __name__)
login_manager = LoginManager()

INVALID_EMAIL = "InvalidEmail"
EMAIL_TAKEN = "EmailTaken"
PASSWORD_TOO_SHORT = "TooShort"
BAD_CREDENTIALS = "BadCredentials"

NAME_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 8

TRUTHY = ("1", "true", "on", "yes")


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


def _required_string(payload, field, errors):
    value = payload.get(field)
    if value is None or (isinstance(value, str) and not value.strip()):
        errors.append(FieldError(field, MISSING_FIELD, f"The {field} field is required."))
        return None
    if not isinstance(value, str):
        errors.append(FieldError(field, INVALID_TYPE, f"The {field} field must be a string."))
        return None
    return value


def email_taken():
    return FieldError("email", EMAIL_TAKEN, "The email has already been taken.")


def is_truthy(value):
    return str(value).strip().lower() in TRUTHY


def validate_registration(payload):
    errors = []
    name = _required_string(payload, "name", errors)
    email = _required_string(payload, "email", errors)
    password = _required_string(payload, "password", errors)

    if name is not None:
        name = name.strip()
        if len(name) > NAME_MAX_LENGTH:
            errors.append(FieldError(
                "name", TOO_LONG,
                f"The name field must not be greater than {NAME_MAX_LENGTH} characters.",
            ))
    if email is not None:
        email = email.strip().lower()
        if "@" not in email:
            errors.append(FieldError("email", INVALID_EMAIL, "The email must be a valid email address."))
        elif db.session.execute(db.select(User).where(User.email == email)).first():
            errors.append(email_taken())
    if password is not None and len(password) < PASSWORD_MIN_LENGTH:
        errors.append(FieldError(
            "password", PASSWORD_TOO_SHORT,
            f"The password must be at least {PASSWORD_MIN_LENGTH} characters.",
        ))

    if errors:
        raise ValidationFailed(errors)
    return {"name": name, "email": email, "password": password}


def create_user(name, email, password):
    user = User(name=name, email=email.strip().lower())
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race with another registration for the same email
        db.session.rollback()
        log.warning("duplicate registration for %s", email)
        raise ValidationFailed([email_taken()])
    except SQLAlchemyError as e:
        db.session.rollback()
        log.exception("could not create user %s", email)
        raise StorageFailure() from e
    log.info("user %s registered", user.id)
    return user


@bp.route("/register", methods=["POST"])
def register():
    fields = validate_registration(request_payload())
    user = create_user(**fields)
    login_user(user)
    flash("Welcome!", "success")
    return redirect(url_for("posts.dashboard"), code=303)


@bp.route("/login", methods=["POST"])
def login():
    payload = request_payload()
    email = payload.get("email")
    password = payload.get("password")

    user = None
    if isinstance(email, str) and isinstance(password, str):
        user = db.session.execute(
            db.select(User).where(User.email == email.strip().lower())
        ).scalar_one_or_none()
    if user is None or not user.check_password(password):
        log.warning("failed login for %r", email)
        raise ValidationFailed([
            FieldError("email", BAD_CREDENTIALS, "These credentials do not match our records."),
        ])

    login_user(user, remember=is_truthy(payload.get("remember")))
    flash("Logged in successfully.", "success")
    return redirect(url_for("posts.dashboard"), code=303)


@bp.route("/logout", methods=["POST"])
def logout():
    if current_user.is_authenticated:
        logout_user()
        flash("Logged out.", "info")
    return redirect(url_for("auth.login_page"), code=303)


@bp.route("/login", methods=["GET"])
def login_page():
    return {"message": "Please log in."}
