"""Failures raised by the post operations and mapped to HTTP responses in app.py."""


class PostError(Exception):
    status_code = 500
    message = "Something went wrong. Please try again."

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self):
        return {"message": self.message}


class ValidationFailed(PostError):
    """One or more field violations, all collected before raising."""

    status_code = 422
    message = "The given data was invalid."

    def __init__(self, errors):
        super().__init__()
        self.errors = list(errors)

    def codes(self):
        """Return ``{field: [code, ...]}``."""
        out = {}
        for err in self.errors:
            out.setdefault(err.field, []).append(err.code)
        return out

    def messages(self):
        """Return ``{field: [message, ...]}`` for the client to show inline."""
        out = {}
        for err in self.errors:
            out.setdefault(err.field, []).append(err.message)
        return out

    def to_dict(self):
        return {"message": self.message, "errors": self.messages()}


class NotFound(PostError):
    status_code = 404
    message = "Post not found."


class Forbidden(PostError):
    status_code = 403
    message = "You are not allowed to change this post."


class Unauthenticated(PostError):
    status_code = 401
    message = "Login required."


class StorageFailure(PostError):
    status_code = 500
