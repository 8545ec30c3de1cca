from __future__ import annotations
from flask import Blueprint, jsonify
from routes import get_container, get_resolver

bp = Blueprint("pages", __name__)

# -------- HTML pages --------

@bp.get("/")
def index():
    c = get_container()
    return c.flip.render("index.html", {"title": "Features"})

# -------- JSON --------

@bp.get("/features")
def features():
    r = get_resolver()
    return jsonify({"features": r.features, "overrides": r.overrides})
