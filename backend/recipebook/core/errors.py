# core/errors.py
# Domain error kinds. Each carries the HTTP status and a client-safe message;
# main.py renders them as {"error": message}.

from __future__ import annotations


class RecipeBookError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RecipeBookError):
    """Required field missing or malformed on a write."""
    status_code = 400
    default_message = "Missing fields required"


class InvalidReference(RecipeBookError):
    """Referenced cuisine does not resolve to a stored entity."""
    status_code = 400
    default_message = "Invalid cuisine"


class NotFound(RecipeBookError):
    status_code = 404
    default_message = "Not found"


class InvalidIdentifier(NotFound):
    # a malformed id can never match a document, so it is reported as a miss
    default_message = "Invalid identifier"


class RecipeNotFound(NotFound):
    default_message = "Recipe not found"


class ReviewNotFound(NotFound):
    default_message = "Review not found"


class StoreFailure(RecipeBookError):
    """Persistence failed for reasons unrelated to the input. Never retried."""
    status_code = 500
    default_message = "Internal server error"


class AuthError(RecipeBookError):
    status_code = 401
    default_message = "Invalid email or password"
