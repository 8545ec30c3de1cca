"""
Middleware installers for Flask.

- Request ID injection (used by the log formatter)

The per-request feature resolver is installed by FeatureFlip.connect_all()
(app/feature_flags.py).
"""

from __future__ import annotations
import uuid

from flask import Flask, g, request


def install_request_id(app: Flask) -> None:
    @app.before_request
    def _req_id():
        g.request_id = request.headers.get("X-Request-ID") or f"req_{uuid.uuid4().hex[:12]}"

    @app.after_request
    def _stamp(response):
        response.headers["X-Request-ID"] = g.get("request_id", "-")
        return response
