"""
Template data for rendered views.

Every view gets two extra values:
- Features      resolved flag mapping
- FeaturesJSON  the same mapping as compact JSON (for client-side scripts)

template_data() builds a fresh dict; the caller's data is never mutated.
wrap_render() decorates any render(view, data, ...) callable with it.
"""

from __future__ import annotations
import json
from functools import wraps
from typing import Any, Callable, Dict, Mapping, Optional

from service.resolver import RequestFeatureResolver

FEATURES_KEY = "Features"
FEATURES_JSON_KEY = "FeaturesJSON"


def features_json(features: Mapping[str, bool]) -> str:
    """Compact JSON, safe to drop inside a <script> block (ids may come from the cookie)."""
    out = json.dumps(dict(features), separators=(",", ":"))
    return out.replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026")


def template_data(
    resolver: RequestFeatureResolver,
    data: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    out: Dict[str, Any] = dict(data or {})
    features = resolver.features
    out[FEATURES_KEY] = features
    out[FEATURES_JSON_KEY] = features_json(features)
    return out


def wrap_render(
    render: Callable[..., Any],
    resolver: RequestFeatureResolver,
) -> Callable[..., Any]:
    @wraps(render)
    def render_features(view: str, data: Optional[Mapping[str, Any]] = None, *args, **kwargs):
        return render(view, template_data(resolver, data), *args, **kwargs)

    return render_features
