"""Security headers middleware.

Adds security-related response headers. Locally stored images under the
media prefix are fetched cross-origin by the web client, so those responses
get a cross-origin resource policy and cache headers instead of the strict
API defaults.
"""

from typing import Callable

DEFAULT_HEADERS = {
    "Content-Security-Policy": "default-src 'none'",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
}

MEDIA_HEADERS = {
    "Cross-Origin-Resource-Policy": "cross-origin",
    "Cache-Control": "private, max-age=3600",
}


def _encode(headers: dict[str, str]) -> list[tuple[bytes, bytes]]:
    return [(k.lower().encode(), v.encode()) for k, v in headers.items()]


def SecurityHeadersMiddleware(
    app: Callable,
    headers: dict[str, str] | None = None,
    media_path_prefix: str | None = None,
) -> Callable:
    """Set security headers on all responses; media paths get MEDIA_HEADERS overrides."""
    base = dict(headers if headers is not None else DEFAULT_HEADERS)
    api_headers = _encode(base)
    media_headers = _encode({**base, **MEDIA_HEADERS})
    prefix = media_path_prefix.rstrip("/") + "/" if media_path_prefix else None

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        is_media = prefix is not None and scope.get("path", "").startswith(prefix)
        to_add = media_headers if is_media else api_headers

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                out = list(message.get("headers", []))
                seen = {h[0].lower() for h in out}
                for name_b, value_b in to_add:
                    if name_b not in seen:
                        out.append((name_b, value_b))
                        seen.add(name_b)
                message["headers"] = out
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
