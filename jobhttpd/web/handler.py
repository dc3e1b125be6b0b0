"""Request handlers and the dispatcher that routes requests to them."""

from typing import Callable, Optional

from jobhttpd.web.errors import BadRequest, Conflict, NotFound
from jobhttpd.web.request import HttpMethod, HttpRequest
from jobhttpd.web.response import OK, Response

Handler = Callable[[HttpRequest], Response]


def default_get(req: HttpRequest) -> Response:
    """Built-in GET behaviour used when no GET routes are registered."""
    if req.path == "/":
        return (
            Response(OK)
            .set_header("Content-Type", "text/html; charset=utf-8")
            .with_body("<html><body><h1>GET /</h1><p>Hello from GET!</p></body></html>")
        )
    if req.path == "/conflict":
        raise Conflict("Simulated conflict")
    raise NotFound()


def default_head(req: HttpRequest) -> Response:
    """Built-in HEAD behaviour used when no HEAD routes are registered."""
    if req.path == "/":
        return (
            Response(OK)
            .set_header("Content-Type", "text/html; charset=utf-8")
            .with_body("<html><body><h1>HEAD /</h1><p>Headers only</p></body></html>")
        )
    raise NotFound()


def default_post(req: HttpRequest) -> Response:
    """Echo a plain-text body; any other declared content type is rejected."""
    content_type = req.headers.get("Content-Type")
    if content_type is not None and not content_type.startswith("text/plain"):
        raise BadRequest("Only text/plain supported")
    body = req.body.decode("utf-8", errors="replace")
    return (
        Response(OK)
        .set_header("Content-Type", "text/plain; charset=utf-8")
        .with_body(f"You POSTed: {body}")
    )


def _route_table(routes: dict[str, Handler]) -> Handler:
    table = dict(routes)

    def handle(req: HttpRequest) -> Response:
        handler = table.get(req.path)
        if handler is None:
            raise NotFound()
        return handler(req)

    return handle


class Dispatcher:
    """Routes a request to the handler for its method."""

    def __init__(
        self,
        get: Handler = default_get,
        head: Handler = default_head,
        post: Handler = default_post,
    ) -> None:
        self._handlers: dict[HttpMethod, Handler] = {
            HttpMethod.GET: get,
            HttpMethod.HEAD: head,
            HttpMethod.POST: post,
        }

    @classmethod
    def builder(cls) -> "DispatcherBuilder":
        return DispatcherBuilder()

    def dispatch(self, req: HttpRequest) -> Response:
        """Run the handler for the request's method; raises ServerError subclasses."""
        handler: Optional[Handler] = self._handlers.get(req.method)
        if handler is None:
            raise BadRequest(f"Unsupported method: {req.method_name}")
        return handler(req)


class DispatcherBuilder:
    """Collects path routes per method; a method without routes keeps its default."""

    def __init__(self) -> None:
        self._get: dict[str, Handler] = {}
        self._head: dict[str, Handler] = {}
        self._post: dict[str, Handler] = {}

    def get(self, path: str, handler: Handler) -> "DispatcherBuilder":
        self._get[path] = handler
        return self

    def head(self, path: str, handler: Handler) -> "DispatcherBuilder":
        self._head[path] = handler
        return self

    def post(self, path: str, handler: Handler) -> "DispatcherBuilder":
        self._post[path] = handler
        return self

    def build(self) -> Dispatcher:
        return Dispatcher(
            get=_route_table(self._get) if self._get else default_get,
            head=_route_table(self._head) if self._head else default_head,
            post=_route_table(self._post) if self._post else default_post,
        )