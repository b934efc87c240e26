"""Post resource operations: validate, authorize, then touch the store."""
import logging
from datetime import datetime

import authorization
from validation import BODY_MAX_LENGTH, TITLE_MAX_LENGTH, validate_post

SCOPE_OWN = "own"
SCOPE_ALL = "all"


class PostService:
    def __init__(self, store, is_clean, title_max=TITLE_MAX_LENGTH,
                 body_max=BODY_MAX_LENGTH, log=None):
        self.store = store
        self.is_clean = is_clean
        self.title_max = title_max
        self.body_max = body_max
        self.log = log or logging.getLogger(__name__)

    def _validate(self, payload):
        return validate_post(payload, self.is_clean, self.title_max, self.body_max)

    def list(self, requester, scope=SCOPE_OWN):
        if scope == SCOPE_OWN:
            authorization.ensure_allowed(requester, authorization.LIST_OWN)
            return self.store.for_owner(requester.id)
        if scope == SCOPE_ALL:
            return self.dashboard(requester)
        raise ValueError(f"unknown scope: {scope!r}")

    def dashboard(self, requester):
        """All posts across users with their owners, newest first."""
        authorization.ensure_allowed(requester, authorization.LIST_ALL)
        return self.store.all_with_owners()

    def create(self, requester, payload):
        authorization.ensure_allowed(requester, authorization.CREATE)
        fields = self._validate(payload)
        post = self.store.add(fields["title"], fields["body"], owner_id=requester.id)
        self.log.info("post %s created by user %s", post.id, requester.id)
        return post

    def update(self, requester, post_id, payload):
        """Overwrite title and body. Last write wins; there is no version check."""
        authorization.ensure_authenticated(requester)
        post = self.store.load(post_id)
        authorization.ensure_allowed(requester, authorization.UPDATE, post)
        fields = self._validate(payload)

        post.title = fields["title"]
        post.body = fields["body"]
        post.user_id = requester.id
        # Stamp every write, even when the fields did not change
        post.updated_at = datetime.utcnow()
        self.store.save(post)
        self.log.info("post %s updated by user %s", post.id, requester.id)
        return post

    def delete(self, requester, post_id):
        authorization.ensure_authenticated(requester)
        post = self.store.load(post_id)
        authorization.ensure_allowed(requester, authorization.DELETE, post)
        self.store.remove(post)
        self.log.info("post %s deleted by user %s", post_id, requester.id)
