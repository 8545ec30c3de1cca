"""
Service package exports & protocols.

Exposes:
- constants: DEFAULT_COOKIE_NAME, DEFAULT_MANUAL_ROUTE
- protocol types for DI hints (FlagEngine, UserLoader)
"""

from __future__ import annotations
from typing import Any, Callable, Dict, Protocol

DEFAULT_COOKIE_NAME = "fflip"
DEFAULT_MANUAL_ROUTE = "/fflip/:name/:action"

# ---- Protocols (for type-hints / DI) ----


class FlagEngine(Protocol):
    def evaluate(self, user: Any) -> Dict[str, bool]: ...
    def is_registered(self, flag_id: str) -> bool: ...


UserLoader = Callable[[], Any]
