"""
Feature flags for Flask requests.

FeatureFlip wires a flag engine into the request cycle:

- before_request: builds a RequestFeatureResolver from the engine and the
  client's override cookie, attaches it to g.fflip
- context processor: every render_template() gets Features / FeaturesJSON
- manual route (default /fflip/:name/:action): lets a client enable (1),
  disable (0) or remove (-1) its own override for one flag

Usage:
    flip = FeatureFlip(registry, FlipOptions(cookie_name="ff"))
    flip.connect_all(app)

    @app.get("/")
    def home():
        if g.fflip.has("beta_search"):
            ...
        return flip.render("home.html", {"title": "Home"})
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from flask import Flask, g, jsonify, render_template, request

from app.config import Settings
from service import DEFAULT_COOKIE_NAME, DEFAULT_MANUAL_ROUTE, FlagEngine, UserLoader
from service.manual_override import flip
from service.overrides import decode_overrides, encode_overrides
from service.rendering import template_data, wrap_render
from service.resolver import RequestFeatureResolver

log = logging.getLogger(__name__)

MANUAL_ENDPOINT = "fflip_manual"

_PARAM = re.compile(r":(\w+)")


def to_flask_rule(path: str) -> str:
    """'/fflip/:name/:action' -> '/fflip/<name>/<action>'"""
    rule = _PARAM.sub(r"<\1>", path)
    return rule if rule.startswith("/") else "/" + rule


@dataclass(frozen=True)
class FlipOptions:
    cookie_name: str = DEFAULT_COOKIE_NAME
    cookie_options: Optional[Dict[str, Any]] = None
    manual_route_path: str = DEFAULT_MANUAL_ROUTE
    cookies_enabled: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "FlipOptions":
        return cls(
            cookie_name=settings.FFLIP_COOKIE_NAME or DEFAULT_COOKIE_NAME,
            cookie_options=settings.cookie_options(),
            manual_route_path=settings.FFLIP_MANUAL_ROUTE or DEFAULT_MANUAL_ROUTE,
            cookies_enabled=settings.FFLIP_COOKIES_ENABLED,
        )


class FeatureFlip:
    def __init__(
        self,
        engine: FlagEngine,
        options: Optional[FlipOptions] = None,
        user_loader: Optional[UserLoader] = None,
    ):
        self.engine = engine
        self.options = options or FlipOptions()
        self.user_loader = user_loader

    # ---- request helpers ----

    def _cookies(self) -> Optional[Mapping[str, str]]:
        return request.cookies if self.options.cookies_enabled else None

    def middleware(self) -> None:
        """before_request hook: attach this request's resolver to g.fflip."""
        cookies = self._cookies() or {}
        g.fflip = RequestFeatureResolver(
            self.engine,
            decode_overrides(cookies.get(self.options.cookie_name)),
            user_loader=self.user_loader,
        )

    def template_context(self) -> Dict[str, Any]:
        resolver = g.get("fflip")
        if resolver is None:
            return {}
        return template_data(resolver)

    def render(self, view: str, data: Optional[Mapping[str, Any]] = None) -> str:
        render = wrap_render(lambda v, ctx: render_template(v, **ctx), g.fflip)
        return render(view, data)

    # ---- manual flipping ----

    def manual_route(self, name: str, action: str):
        result, flags = flip(
            self.engine,
            self._cookies(),
            self.options.cookie_name,
            name,
            action,
        )
        log.info("Override %s -> %s", name, result.message)

        response = jsonify(result.to_dict())
        response.status_code = 200
        response.set_cookie(
            self.options.cookie_name,
            encode_overrides(flags),
            **(self.options.cookie_options or {}),
        )
        return response

    # ---- wiring ----

    def connect_all(self, app: Flask) -> None:
        app.before_request(self.middleware)
        app.context_processor(self.template_context)
        app.add_url_rule(
            to_flask_rule(self.options.manual_route_path),
            MANUAL_ENDPOINT,
            self.manual_route,
            methods=["GET"],
        )
        app.extensions["fflip"] = self
