from typing import Any

from ..infrastructure.logging import set_request_id


def function_name(context: Any) -> str:
    return getattr(context, "function_name", None) or "local"


def aws_request_id(context: Any) -> str:
    return getattr(context, "aws_request_id", None) or ""


def bind_invocation(context: Any) -> str:
    """Bind the invocation's request ID to the log context and return it."""
    rid = aws_request_id(context)
    set_request_id(rid)
    return rid
