"""ASGI-facing pieces: middleware, send interceptor and route resolution."""

from http_monitor.api.middleware import PrometheusMiddleware, set_error_message
from http_monitor.api.response_interceptor import DEFAULT_STATUS_CODE, ResponseInterceptor
from http_monitor.api.routing import RouteResolver, StarletteRouteResolver

__all__ = [
    "DEFAULT_STATUS_CODE",
    "PrometheusMiddleware",
    "ResponseInterceptor",
    "RouteResolver",
    "StarletteRouteResolver",
    "set_error_message",
]
