import logging

from sqlalchemy.exc import SQLAlchemyError

from errors import NotFound, StorageFailure
from models import Post, User, db

log = logging.getLogger(__name__)


def _newest_first(query):
    return query.order_by(Post.created_at.desc(), Post.id.desc())


class PostStore:
    """Persistence for posts. Each write commits its own transaction."""

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def _commit(self, action):
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            log.exception("%s failed", action)
            raise StorageFailure() from e

    def _read(self, statement):
        try:
            return self.session.execute(statement)
        except SQLAlchemyError as e:
            self.session.rollback()
            log.exception("read failed")
            raise StorageFailure() from e

    def add(self, title, body, owner_id):
        post = Post(title=title, body=body, user_id=owner_id)
        self.session.add(post)
        self._commit("insert post")
        return post

    def get(self, post_id):
        return self._read(db.select(Post).where(Post.id == post_id)).scalar_one_or_none()

    def load(self, post_id):
        post = self.get(post_id)
        if post is None:
            raise NotFound()
        return post

    def save(self, post):
        self.session.add(post)
        self._commit(f"update post {post.id}")
        return post

    def remove(self, post):
        self.session.delete(post)
        self._commit(f"delete post {post.id}")

    def for_owner(self, owner_id):
        query = _newest_first(db.select(Post).where(Post.user_id == owner_id))
        return list(self._read(query).scalars())

    def all_with_owners(self):
        """Every post paired with its owner (None if the user row is gone)."""
        query = _newest_first(
            db.select(Post, User).outerjoin(User, Post.user_id == User.id)
        )
        return [(post, user) for post, user in self._read(query)]
