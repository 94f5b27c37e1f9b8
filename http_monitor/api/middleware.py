"""ASGI middleware recording request latency and response size."""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING, Any, MutableMapping

from starlette.types import ASGIApp, Receive, Scope, Send

from http_monitor.api.response_interceptor import ResponseInterceptor
from http_monitor.schemas.labels import RequestLabels

if TYPE_CHECKING:
    from http_monitor.core.monitor import Monitor

SERVER_ERROR_STATUS_CODE = int(HTTPStatus.INTERNAL_SERVER_ERROR)


def protocol_label(http_version: str) -> str:
    """Format the request protocol as ``HTTP/<major>.<minor>`` (``2`` becomes ``HTTP/2.0``)."""
    if "." not in http_version:
        http_version = f"{http_version}.0"
    return f"HTTP/{http_version}"


def _header_name(key: str) -> bytes:
    return key.lower().encode("latin-1")


def pop_header(scope: MutableMapping[str, Any], key: str) -> str:
    """Return the first value of header ``key`` and remove every occurrence.

    Returns ``""`` when the header is absent.
    """
    name = _header_name(key)
    headers = scope.get("headers") or []
    value = ""
    found = False
    kept = []
    for header_key, header_value in headers:
        if header_key.lower() == name:
            if not found:
                value = header_value.decode("latin-1")
                found = True
            continue
        kept.append((header_key, header_value))

    if found:
        if isinstance(headers, list):
            headers[:] = kept
        else:
            scope["headers"] = kept
    return value


def set_error_message(target: Any, message: str, key: str) -> None:
    """Attach ``message`` to the request under header ``key``.

    ``target`` is a Starlette ``Request`` or a raw ASGI scope.  Handlers
    call this (usually through ``Monitor.set_error_message``) so the
    middleware can label the request with the reason it failed.
    """
    scope = getattr(target, "scope", target)
    name = _header_name(key)
    headers = [(k, v) for k, v in (scope.get("headers") or []) if k.lower() != name]
    headers.append((name, message.encode("latin-1", errors="replace")))
    scope["headers"] = headers
    # Request objects cache their parsed headers.
    if hasattr(target, "_headers"):
        del target._headers


class PrometheusMiddleware:
    """Pure ASGI middleware recording one latency and one size observation per request.

    Usage:
        app.add_middleware(PrometheusMiddleware, monitor=monitor)

    Only ``http`` scopes are measured; websocket and lifespan traffic is
    passed straight through.
    """

    def __init__(self, app: ASGIApp, monitor: Monitor) -> None:
        self.app = app
        self.monitor = monitor

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        interceptor = ResponseInterceptor(send)
        resolver = self.monitor.route_resolver
        route = resolver.resolve(scope)

        status = None
        try:
            await self.app(scope, receive, interceptor)
        except Exception:
            # The server answers 500 when the app fails before starting a response.
            if not interceptor.response_started:
                status = SERVER_ERROR_STATUS_CODE
            raise
        finally:
            duration = interceptor.elapsed()
            if status is None:
                status = interceptor.status
            if not route:
                # After routing, Mount may have rewritten the scope paths.
                route = str(getattr(scope.get("route"), "path", "") or "")

            labels = RequestLabels(
                protocol=protocol_label(scope.get("http_version", "1.1")),
                status=str(status),
                method=scope.get("method", ""),
                route=route,
                is_error=str(bool(self.monitor.is_status_error(status))).lower(),
                error_message=pop_header(scope, self.monitor.error_message_key),
            )

            metrics = self.monitor.metrics
            metrics.observe_request(labels, duration)
            metrics.observe_response_size(labels, interceptor.bytes_written)
