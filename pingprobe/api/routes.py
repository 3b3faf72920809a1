"""FastAPI routing for the ping endpoint."""

from fastapi import APIRouter, Request, Response

from pingprobe.core.controller import PingController
from pingprobe.core.types import ResponseSpec


def to_response(spec: ResponseSpec) -> Response:
    """Convert a rendered ping into a Starlette response.

    `Expires` is only sent when the spec asks for it to be passed through.
    """
    headers = dict(spec.headers)
    expires = headers.pop("Expires", None)

    response = Response(
        content=spec.body,
        status_code=spec.status_code,
        headers=headers,
    )
    if spec.requires_expires_override and expires is not None:
        response.headers["Expires"] = expires

    return response


def build_ping_router(controller: PingController, path: str = "/ping") -> APIRouter:
    """Create a router serving `controller` at `path` for GET and HEAD.

    The endpoint is synchronous so the check runs in the thread pool and
    never blocks the event loop.
    """
    router = APIRouter()

    @router.api_route(
        path,
        methods=["GET", "HEAD"],
        include_in_schema=False,
        response_class=Response,
    )
    def ping(request: Request) -> Response:
        return to_response(controller(request.scope.get("http_version")))

    return router
