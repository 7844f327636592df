"""Per-request context: request id and signed-in user."""

import uuid
from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("request_id", default="")
user_id_var: ContextVar[str] = ContextVar("user_id", default="")


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return str(uuid.uuid4())


def get_request_id() -> str:
    """Get current request ID from context."""
    return request_id_var.get("")


def set_request_id(request_id: str) -> None:
    """Set request ID in context."""
    request_id_var.set(request_id)


def get_user_id() -> str:
    return user_id_var.get("")


def set_user_id(user_id: str) -> None:
    user_id_var.set(user_id)
