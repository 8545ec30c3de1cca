"""
Feature flip errors.

Every failure raised by this package is a FeatureFlipError, so the host's
error handler can tell them apart from unrelated errors and render them
with their own status code.
"""

from __future__ import annotations
from typing import Any, Dict


class FeatureFlipError(Exception):
    code: str = "FFLIP_ERROR"
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message, "status": self.status_code}


class FeatureNotFound(FeatureFlipError):
    code = "FEATURE_NOT_FOUND"
    status_code = 404


class CookiesUnavailable(FeatureFlipError):
    code = "COOKIES_UNAVAILABLE"
    status_code = 500


class BadAction(FeatureFlipError):
    code = "BAD_ACTION"
    status_code = 400


class FeaturesNotSet(FeatureFlipError):
    code = "FEATURES_NOT_SET"
    status_code = 500
