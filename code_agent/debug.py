"""
debug.py - API traffic dumps and Langfuse tracing.

Set DEBUG_LOG=true (or pass --debug) to print every request and response.
Tracing goes to Langfuse when LANGFUSE_SECRET_KEY and LANGFUSE_PUBLIC_KEY
are set; without them the observe() spans stay local and the trace helpers
below do nothing. The keys are checked on each call so values loaded from
.env after import still count.
"""

import json
import os

from langfuse import get_client, observe

DEBUG_LOG = os.getenv("DEBUG_LOG", "false").lower() == "true"

__all__ = [
    "observe",
    "set_debug",
    "langfuse_enabled",
    "log_api_call",
    "log_api_response",
    "update_trace",
    "score_trace",
]


def set_debug(enabled: bool) -> None:
    global DEBUG_LOG
    DEBUG_LOG = enabled


def langfuse_enabled() -> bool:
    return bool(os.getenv("LANGFUSE_SECRET_KEY") and os.getenv("LANGFUSE_PUBLIC_KEY"))


def _rule(title: str) -> None:
    print("\n" + "=" * 80)
    print(title)
    print("=" * 80)


def log_api_call(request: dict):
    """Dump the exact kwargs passed to messages.create()."""
    if not DEBUG_LOG:
        return
    _rule(f"[API CALL] model: {request.get('model')}")
    print(json.dumps(request, ensure_ascii=False, indent=2, default=str))
    print("=" * 80 + "\n")


def log_api_response(response, message_param: dict):
    """Dump stop reason, token usage and the converted assistant message."""
    if not DEBUG_LOG:
        return
    usage = getattr(response, "usage", None)
    _rule(f"[API RESPONSE] stop_reason: {getattr(response, 'stop_reason', None)}")
    if usage is not None:
        print(f"usage: in={getattr(usage, 'input_tokens', '?')} out={getattr(usage, 'output_tokens', '?')}")
    print(json.dumps(message_param, ensure_ascii=False, indent=2, default=str))
    print("=" * 80 + "\n")


def update_trace(**kwargs) -> None:
    if langfuse_enabled():
        get_client().update_current_trace(**kwargs)


def score_trace(name: str, value: float, comment: str = "") -> None:
    if langfuse_enabled():
        get_client().score_current_trace(name=name, value=value, comment=comment)
