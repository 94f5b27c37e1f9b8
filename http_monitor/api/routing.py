"""Route template resolution for Starlette and FastAPI applications.

Labels use the matched path template (``/users/{id}``) rather than the
raw path so that path parameters do not explode series cardinality.
"""

from typing import Any, Iterable, Optional, Protocol, runtime_checkable

from starlette.routing import Match
from starlette.types import Scope


@runtime_checkable
class RouteResolver(Protocol):
    """Return the path template for the request in ``scope``, or ``""``."""

    def resolve(self, scope: Scope) -> str: ...


def _match_routes(routes: Iterable[Any], scope: Scope) -> Optional[str]:
    for route in routes:
        try:
            match, child_scope = route.matches(scope)
        except Exception:
            continue
        if match != Match.FULL:
            continue

        path = getattr(route, "path", "") or ""
        sub_routes = getattr(route, "routes", None)
        if sub_routes:
            # Mount: the template is the mount prefix plus the inner match.
            nested = _match_routes(sub_routes, {**scope, **child_scope})
            return path + nested if nested is not None else None
        return path
    return None


class StarletteRouteResolver:
    """Resolve templates from a Starlette router.

    Uses the ``route`` entry FastAPI leaves in the scope once routing has
    run; before that, matches the scope against the application's routes
    the same way the router will.
    """

    def resolve(self, scope: Scope) -> str:
        route = scope.get("route")
        path = getattr(route, "path", None)
        if path:
            return str(path)

        router = scope.get("router") or scope.get("app")
        routes = getattr(router, "routes", None)
        if not routes:
            return ""
        return _match_routes(routes, scope) or ""
