"""
FeatureFlip extension tests (middleware, template context, wiring).

Covers:
- resolver attached to g.fflip with the decoded override cookie
- custom cookie name / disabled cookies
- connect_all(): hook, context processor, manual rule, extension entry
- route template conversion (":name" -> "<name>")
"""

from __future__ import annotations
from flask import Flask, g
from werkzeug.http import dump_cookie

from app.feature_flags import MANUAL_ENDPOINT, FeatureFlip, FlipOptions, to_flask_rule
from routes import get_resolver
from service.overrides import encode_overrides
from service.resolver import RequestFeatureResolver


def _pair(name: str, value: str) -> str:
    # "name=value" part of a Set-Cookie header, as a browser sends it back
    return dump_cookie(name, value).split(";", 1)[0]


def _cookie(name: str, flags) -> dict:
    return {"Cookie": _pair(name, encode_overrides(flags))}


def test_middleware_attaches_resolver(app, flip, user_xyz):
    with app.test_request_context("/", headers=_cookie("fflip", {"fClosed": True})):
        flip.middleware()
        r = g.fflip
        assert isinstance(r, RequestFeatureResolver)
        assert get_resolver() is r
        r.set_for_user(user_xyz)
        assert r.has("fOpen") is True
        assert r.has("fClosed") is True
        assert r.has("notafeature") is False


def test_middleware_uses_configured_cookie(registry, user_xyz):
    app = Flask(__name__)
    flip = FeatureFlip(registry, FlipOptions(cookie_name="CUSTOM_COOKIE_NAME"))
    headers = {"Cookie": "; ".join([
        _pair("fflip", encode_overrides({"fOpen": False})),
        _pair("CUSTOM_COOKIE_NAME", encode_overrides({"fClosed": True})),
    ])}
    with app.test_request_context("/", headers=headers):
        flip.middleware()
        assert g.fflip.overrides == {"fClosed": True}


def test_middleware_ignores_bad_cookie(app, flip):
    with app.test_request_context("/", headers={"Cookie": "fflip=garbage"}):
        flip.middleware()
        assert g.fflip.overrides == {}


def test_middleware_reads_plain_json_cookie(app, flip):
    with app.test_request_context("/", headers={"Cookie": _pair("fflip", '{"fClosed":true}')}):
        flip.middleware()
        assert g.fflip.overrides == {"fClosed": True}


def test_middleware_survives_deeply_nested_cookie(app, flip):
    with app.test_request_context("/", headers={"Cookie": _pair("fflip", "[" * 4000)}):
        assert flip.middleware() is None
        assert g.fflip.overrides == {}


def test_middleware_without_cookie_support(registry):
    app = Flask(__name__)
    flip = FeatureFlip(registry, FlipOptions(cookies_enabled=False))
    with app.test_request_context("/", headers=_cookie("fflip", {"fClosed": True})):
        assert flip.middleware() is None
        assert g.fflip.overrides == {}


def test_features_empty_without_user(registry):
    app = Flask(__name__)
    flip = FeatureFlip(registry)
    with app.test_request_context("/"):
        flip.middleware()
        assert g.fflip.features == {}
        assert flip.template_context() == {"Features": {}, "FeaturesJSON": "{}"}


def test_template_context_without_middleware(registry):
    app = Flask(__name__)
    with app.test_request_context("/"):
        assert FeatureFlip(registry).template_context() == {}


def test_connect_all(registry):
    app = Flask(__name__)
    flip = FeatureFlip(registry)
    flip.connect_all(app)

    assert app.extensions["fflip"] is flip
    assert flip.middleware in app.before_request_funcs[None]
    assert flip.template_context in app.template_context_processors[None]
    rules = {r.rule: r.endpoint for r in app.url_map.iter_rules()}
    assert rules["/fflip/<name>/<action>"] == MANUAL_ENDPOINT
    assert app.view_functions[MANUAL_ENDPOINT] == flip.manual_route


def test_connect_all_custom_route(registry):
    app = Flask(__name__)
    FeatureFlip(registry, FlipOptions(manual_route_path="CUSTOM/PATH/:name/:action")).connect_all(app)
    rules = [r.rule for r in app.url_map.iter_rules()]
    assert "/CUSTOM/PATH/<name>/<action>" in rules


def test_to_flask_rule():
    assert to_flask_rule("/fflip/:name/:action") == "/fflip/<name>/<action>"
    assert to_flask_rule("/flags/<name>/<action>") == "/flags/<name>/<action>"
