from __future__ import annotations
from flask import Blueprint, current_app, jsonify
from app.config import Settings

bp = Blueprint("health", __name__)

VERSION = "0.1.0"

@bp.get("/health")
def health():
    # lightweight liveness
    return "ok", 200, {"Content-Type": "text/plain; charset=utf-8"}

@bp.get("/version")
def version():
    s: Settings = current_app.config.get("SETTINGS") or getattr(current_app, "container").settings
    info = {
        "name": "fflip-flask",
        "version": VERSION,
        "cookie": s.FFLIP_COOKIE_NAME,
    }
    return jsonify(info)
