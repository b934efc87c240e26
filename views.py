from flask import Blueprint, current_app, flash, jsonify, redirect, request, url_for
from flask_login import current_user

from posts import SCOPE_ALL, SCOPE_OWN, PostService
from store import PostStore

bp = Blueprint("posts", __name__)


def get_service():
    cfg = current_app.config
    return PostService(
        PostStore(),
        current_app.extensions["is_clean"],
        title_max=cfg["TITLE_MAX_LENGTH"],
        body_max=cfg["BODY_MAX_LENGTH"],
        log=current_app.logger,
    )


def requester():
    return current_user._get_current_object()


def request_payload():
    """Accept JSON bodies and classic form posts alike."""
    if request.is_json:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}
    return request.form.to_dict()


def back_to_index(message):
    flash(message, "success")
    return redirect(url_for("posts.index"), code=303)


@bp.route("/")
def home():
    return redirect(url_for("posts.dashboard"))


@bp.route("/posts", methods=["GET"])
def index():
    posts = get_service().list(requester(), SCOPE_OWN)
    return jsonify(posts=[p.to_dict() for p in posts])


@bp.route("/dashboard", methods=["GET"])
def dashboard():
    rows = get_service().list(requester(), SCOPE_ALL)
    posts = []
    for post, owner in rows:
        item = post.to_dict()
        item["user"] = owner.identity() if owner is not None else None
        posts.append(item)
    return jsonify(posts=posts)


@bp.route("/posts", methods=["POST"])
def store():
    get_service().create(requester(), request_payload())
    return back_to_index("Post created!")


@bp.route("/posts/<int:post_id>", methods=["PUT", "PATCH"])
def update(post_id):
    get_service().update(requester(), post_id, request_payload())
    return back_to_index("Post updated!")


@bp.route("/posts/<int:post_id>", methods=["DELETE"])
def destroy(post_id):
    get_service().delete(requester(), post_id)
    return back_to_index("Post deleted.")
