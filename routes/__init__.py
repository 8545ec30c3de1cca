"""
Route helpers.

Exports:
- get_container(): typed access to app.container
- get_resolver(): this request's RequestFeatureResolver (g.fflip)
"""

from __future__ import annotations

from flask import current_app, g

from service.resolver import RequestFeatureResolver

# ---- Container access ----

def get_container():
    c = getattr(current_app, "container", None)
    if c is None:
        raise RuntimeError("Container not initialized on app")
    return c

# ---- Per-request features ----

def get_resolver() -> RequestFeatureResolver:
    r = g.get("fflip")
    if r is None:
        raise RuntimeError("FeatureFlip middleware not installed on app")
    return r
