from __future__ import annotations

import json

from flask import Flask, Response, stream_with_context

from ..container import Container

KEEPALIVE_SECONDS = 15.0


def register(app: Flask, container: Container) -> None:
    broadcaster = container.broadcaster

    @app.get("/api/events", endpoint="change_events")
    def change_events():
        def stream():
            # Subscribe on first read; HEAD and abandoned responses never get here.
            sub = broadcaster.subscribe()
            try:
                yield ": connected\n\n"
                while True:
                    message = sub.get(timeout=KEEPALIVE_SECONDS)
                    if message is None:
                        yield ": keepalive\n\n"
                        continue
                    yield f"data: {json.dumps(message)}\n\n"
            finally:
                sub.close()

        return Response(
            stream_with_context(stream()),
            mimetype="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )
