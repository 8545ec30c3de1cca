"""
FeatureRegistry
- In-memory flag engine shared by every request of the process
- Each flag is either a fixed boolean or a predicate over the user context
- evaluate(user) covers every registered flag; is_registered() backs the
  manual endpoint's not-found check

Flags are registered once at startup; after that the registry is read-only
and safe to share between worker threads.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Mapping, Optional

log = logging.getLogger(__name__)


@dataclass
class FeatureFlag:
    id: str
    description: str = ""
    check: Optional[Callable[[Any], bool]] = None
    default: bool = False

    def is_enabled_for(self, user: Any) -> bool:
        if self.check is None:
            return self.default
        return bool(self.check(user))


class FeatureRegistry:
    def __init__(self) -> None:
        self._flags: Dict[str, FeatureFlag] = {}

    @classmethod
    def from_mapping(cls, flags: Mapping[str, bool]) -> "FeatureRegistry":
        """Registry of fixed on/off flags, e.g. parsed from settings."""
        reg = cls()
        for flag_id, enabled in flags.items():
            reg.register(flag_id, default=bool(enabled))
        return reg

    # -------- registration --------

    def register(
        self,
        flag_id: str,
        check: Optional[Callable[[Any], bool]] = None,
        *,
        default: bool = False,
        description: str = "",
    ) -> FeatureFlag:
        if not flag_id:
            raise ValueError("flag id cannot be empty")
        flag = FeatureFlag(id=flag_id, description=description, check=check, default=default)
        self._flags[flag_id] = flag
        return flag

    # -------- engine API --------

    def is_registered(self, flag_id: str) -> bool:
        return flag_id in self._flags

    def get(self, flag_id: str) -> Optional[FeatureFlag]:
        return self._flags.get(flag_id)

    def evaluate(self, user: Any) -> Dict[str, bool]:
        out: Dict[str, bool] = {}
        for flag_id, flag in self._flags.items():
            try:
                out[flag_id] = flag.is_enabled_for(user)
            except Exception:
                # a broken predicate disables its flag, not the request
                log.exception("Flag check failed for %s", flag_id)
                out[flag_id] = False
        return out

    def __iter__(self) -> Iterator[FeatureFlag]:
        return iter(self._flags.values())

    def __len__(self) -> int:
        return len(self._flags)
