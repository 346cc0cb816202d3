"""Request body size limit middleware.

Rejects image uploads (multipart or inline base64) whose body exceeds
max_upload_size before any storage tier is contacted. Enforces the limit
for both Content-Length and chunked bodies.
"""

import json
from typing import Any, Callable

from app.middleware._headers import get_header


async def _send_413(send: Callable, max_bytes: int, actual: int | None = None) -> None:
    details: dict[str, Any] = {"max_bytes": max_bytes}
    if actual is not None:
        details["content_length"] = actual
    body = json.dumps(
        {
            "error": "PAYLOAD_TOO_LARGE",
            "message": f"Request body must be at most {max_bytes} bytes",
            "details": details,
        }
    ).encode()
    await send({
        "type": "http.response.start",
        "status": 413,
        "headers": [(b"content-type", b"application/json")],
    })
    await send({"type": "http.response.body", "body": body, "more_body": False})


async def _buffer_body(receive: Callable, max_bytes: int) -> tuple[list[bytes], int]:
    """Read the whole body. Returns (chunks, total); stops early once total > max_bytes."""
    chunks: list[bytes] = []
    total = 0
    while True:
        message = await receive()
        if message["type"] != "http.request":
            continue
        body = message.get("body", b"")
        total += len(body)
        if total > max_bytes:
            return chunks, total
        chunks.append(body)
        if not message.get("more_body", False):
            return chunks, total


def _replay(chunks: list[bytes]) -> Callable:
    """Return a receive callable that replays buffered chunks one message at a time."""
    pending = list(chunks) or [b""]

    async def receive() -> dict:
        if pending:
            body = pending.pop(0)
            return {"type": "http.request", "body": body, "more_body": bool(pending)}
        return {"type": "http.request", "body": b"", "more_body": False}

    return receive


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes with 413."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        content_length = get_header(scope, "content-length")
        if content_length:
            try:
                length = int(content_length)
            except ValueError:
                length = None
            if length is not None and length > max_bytes:
                await _send_413(send, max_bytes, length)
                return
            await app(scope, receive, send)
            return

        if scope.get("method") in ("GET", "HEAD", "OPTIONS"):
            await app(scope, receive, send)
            return

        chunks, total = await _buffer_body(receive, max_bytes)
        if total > max_bytes:
            await _send_413(send, max_bytes, total)
            return
        await app(scope, _replay(chunks), send)

    return asgi_app
