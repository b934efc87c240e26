import logging

from errors import Forbidden, Unauthenticated

log = logging.getLogger(__name__)

LIST_OWN = "list-own"
LIST_ALL = "list-all"
CREATE = "create"
UPDATE = "update"
DELETE = "delete"

OPERATIONS = (LIST_OWN, LIST_ALL, CREATE, UPDATE, DELETE)
OWNER_ONLY = (UPDATE, DELETE)


def is_authenticated(requester):
    return requester is not None and bool(getattr(requester, "is_authenticated", False))


def authorize(requester, operation, post=None):
    """Decide whether ``requester`` may perform ``operation`` (optionally on ``post``)."""
    if operation not in OPERATIONS:
        raise ValueError(f"unknown operation: {operation!r}")
    if not is_authenticated(requester):
        return False
    if operation in OWNER_ONLY:
        return post is not None and post.user_id == requester.id
    # The dashboard listing is open to every signed-in user.
    return True


def ensure_authenticated(requester):
    if not is_authenticated(requester):
        raise Unauthenticated()


def ensure_allowed(requester, operation, post=None):
    """Raise Unauthenticated or Forbidden when authorize() denies."""
    if authorize(requester, operation, post):
        return
    if not is_authenticated(requester):
        raise Unauthenticated()
    log.warning(
        "denied %s on post %s for user %s",
        operation,
        getattr(post, "id", None),
        requester.id,
    )
    raise Forbidden()
