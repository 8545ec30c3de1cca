"""
RequestFeatureResolver
- Built once per request from the shared engine and the client's overrides
- Resolved set = engine.evaluate(user) updated with the overrides
  (override wins; override-only ids are kept)
- Computed on set_for_user(), or lazily through user_loader on first access,
  then cached for the rest of the request

Never share an instance between requests: overrides and users differ.
"""

from __future__ import annotations
from typing import Any, Dict, Mapping, Optional

from service import FlagEngine, UserLoader
from service.errors import FeaturesNotSet


class RequestFeatureResolver:
    def __init__(
        self,
        engine: FlagEngine,
        overrides: Optional[Mapping[str, bool]] = None,
        user_loader: Optional[UserLoader] = None,
    ):
        self._engine = engine
        self._overrides: Dict[str, bool] = dict(overrides or {})
        self._user_loader = user_loader
        self._flags: Optional[Dict[str, bool]] = None

    def set_for_user(self, user: Any) -> None:
        flags = dict(self._engine.evaluate(user))
        flags.update(self._overrides)
        self._flags = flags

    def _ensure(self) -> None:
        if self._flags is None and self._user_loader is not None:
            self.set_for_user(self._user_loader())

    @property
    def is_set(self) -> bool:
        return self._flags is not None

    @property
    def overrides(self) -> Dict[str, bool]:
        return dict(self._overrides)

    @property
    def features(self) -> Dict[str, bool]:
        """Resolved flags (a copy); empty until a user has been set."""
        self._ensure()
        return dict(self._flags or {})

    def has(self, flag_id: str) -> bool:
        """
        True iff the resolved value for flag_id is True.

        Raises FeaturesNotSet when no user was ever set and there is no
        user_loader to fall back on.
        """
        self._ensure()
        if self._flags is None:
            raise FeaturesNotSet(
                f"Features checked before a user was set (flag {flag_id})"
            )
        return self._flags.get(flag_id) is True
