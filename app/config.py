"""
Configuration loader.

- Reads env vars (.env supported by deploy)
- Provides strongly-typed Settings
- Holds the override cookie knobs & static flag defaults
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from service import DEFAULT_COOKIE_NAME, DEFAULT_MANUAL_ROUTE


def _get(name: str, default: Optional[str] = None) -> str:
    v = os.environ.get(name, default)
    if v is None:
        raise RuntimeError(f"Missing required env: {name}")
    return v


@dataclass(frozen=True)
class Settings:
    SECRET_KEY: str

    # Logging
    LOG_LEVEL: str
    LOG_DIR: str                 # empty -> console only

    # Override cookie / manual flipping
    FFLIP_COOKIE_NAME: str
    FFLIP_MANUAL_ROUTE: str      # "/fflip/:name/:action" or Flask "<name>" style
    FFLIP_COOKIES_ENABLED: bool
    FFLIP_COOKIE_MAX_AGE: int | None
    FFLIP_COOKIE_PATH: str
    FFLIP_COOKIE_SECURE: bool
    FFLIP_COOKIE_HTTPONLY: bool

    # Static flags, e.g. "beta_search=1,new_nav=0"
    FFLIP_FLAGS: str

    def cookie_options(self) -> Dict[str, Any]:
        opts: Dict[str, Any] = {"path": self.FFLIP_COOKIE_PATH}
        if self.FFLIP_COOKIE_MAX_AGE is not None:
            opts["max_age"] = self.FFLIP_COOKIE_MAX_AGE
        if self.FFLIP_COOKIE_SECURE:
            opts["secure"] = True
        if self.FFLIP_COOKIE_HTTPONLY:
            opts["httponly"] = True
        return opts

    def parse_flags(self) -> Dict[str, bool]:
        out: Dict[str, bool] = {}
        for part in self.FFLIP_FLAGS.split(","):
            part = part.strip()
            if not part:
                continue
            # "id" alone means on; "id=" (empty value) means off
            key, sep, value = part.partition("=")
            key = key.strip()
            if key:
                out[key] = _to_bool(value) if sep else True
        return out


def _to_bool(s: Any, default: bool = False) -> bool:
    if s is None:
        return default
    if isinstance(s, bool):
        return s
    return str(s).strip().lower() in {"1", "true", "yes", "on"}


def _to_int(s: Any) -> int | None:
    if s is None or s == "":
        return None
    return int(s)


def load_settings(override: dict | None = None) -> Settings:
    o = override or {}
    return Settings(
        SECRET_KEY=o.get("SECRET_KEY", _get("SECRET_KEY", "change-me")),

        LOG_LEVEL=str(o.get("LOG_LEVEL", os.environ.get("LOG_LEVEL", "INFO"))).upper(),
        LOG_DIR=o.get("LOG_DIR", os.environ.get("LOG_DIR", "")),

        FFLIP_COOKIE_NAME=o.get("FFLIP_COOKIE_NAME", os.environ.get("FFLIP_COOKIE_NAME")) or DEFAULT_COOKIE_NAME,
        FFLIP_MANUAL_ROUTE=o.get("FFLIP_MANUAL_ROUTE", os.environ.get("FFLIP_MANUAL_ROUTE")) or DEFAULT_MANUAL_ROUTE,
        FFLIP_COOKIES_ENABLED=_to_bool(o.get("FFLIP_COOKIES_ENABLED", os.environ.get("FFLIP_COOKIES_ENABLED")), True),
        FFLIP_COOKIE_MAX_AGE=_to_int(o.get("FFLIP_COOKIE_MAX_AGE", os.environ.get("FFLIP_COOKIE_MAX_AGE"))),
        FFLIP_COOKIE_PATH=o.get("FFLIP_COOKIE_PATH", os.environ.get("FFLIP_COOKIE_PATH")) or "/",
        FFLIP_COOKIE_SECURE=_to_bool(o.get("FFLIP_COOKIE_SECURE", os.environ.get("FFLIP_COOKIE_SECURE")), False),
        FFLIP_COOKIE_HTTPONLY=_to_bool(o.get("FFLIP_COOKIE_HTTPONLY", os.environ.get("FFLIP_COOKIE_HTTPONLY")), False),

        FFLIP_FLAGS=o.get("FFLIP_FLAGS", os.environ.get("FFLIP_FLAGS", "")),
    )
