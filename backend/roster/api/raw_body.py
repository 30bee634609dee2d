"""Raw Body Capture — ASGI middleware that classifies and replays the request body.

Invariants:
    - The downstream app receives byte-identical body content, exactly once
    - scope["state"] carries raw_body_state (BodyState) and raw_body_length for every HTTP request
    - A client disconnect during the read drops the request; the app is never invoked

Design Decisions:
    - Pure ASGI over BaseHTTPMiddleware: no response buffering, no task-group wrapping
    - Body drained up front: classification needs the whole payload, and the request
      size is bounded by the server's own limits
"""

import logging

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from roster.core.request_body import classify_body

logger = logging.getLogger(__name__)


class RawBodyCaptureMiddleware:
    """Capture the raw body, record its BodyState, then replay it downstream."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        chunks: list[bytes] = []
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                logger.debug(
                    "Client disconnected while sending body",
                    extra={"path": scope.get("path")},
                )
                return
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                break
        body = b"".join(chunks)

        state = scope.setdefault("state", {})
        state["raw_body_state"] = classify_body(body)
        state["raw_body_length"] = len(body)

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if replayed:
                return await receive()
            replayed = True
            return {"type": "http.request", "body": body, "more_body": False}

        await self.app(scope, replay, send)
