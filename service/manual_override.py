"""
Manual override actions.

A client flips its own override for one flag:

  action  mapping change         label
  "1"     mapping[name] = True   enabled
  "0"     mapping[name] = False  disabled
  "-1"    del mapping[name]      removed

Checks run in order and stop at the first failure:
  unknown flag -> FeatureNotFound (404)
  no cookies   -> CookiesUnavailable (500)
  bad action   -> BadAction (400)

Only the override layer changes; the current request's resolved set is not
touched, the new value applies from the next request on.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from service import FlagEngine
from service.errors import BadAction, CookiesUnavailable, FeatureNotFound
from service.overrides import decode_overrides

ENABLE = "1"
DISABLE = "0"
REMOVE = "-1"

ACTION_LABELS: Dict[str, str] = {
    ENABLE: "enabled",
    DISABLE: "disabled",
    REMOVE: "removed",
}


@dataclass(frozen=True)
class ManualActionResult:
    feature: str
    action: str
    message: str
    status: int = 200

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _bad_action(action: str) -> BadAction:
    return BadAction(
        f"Bad Input. Action ({action}) must be 1 (enable), 0 (disable), or -1 (remove)"
    )


def apply_action(flags: Mapping[str, bool], name: str, action: str) -> Tuple[Dict[str, bool], str]:
    """Return (new mapping, label); the input mapping is left as is."""
    updated = dict(flags)
    if action == ENABLE:
        updated[name] = True
    elif action == DISABLE:
        updated[name] = False
    elif action == REMOVE:
        updated.pop(name, None)
    else:
        raise _bad_action(action)
    return updated, ACTION_LABELS[action]


def flip(
    engine: FlagEngine,
    cookies: Optional[Mapping[str, Any]],
    cookie_name: str,
    name: str,
    action: str,
) -> Tuple[ManualActionResult, Dict[str, bool]]:
    if not engine.is_registered(name):
        raise FeatureNotFound(f"Feature {name} not found")
    if cookies is None:
        raise CookiesUnavailable("Cookies are not enabled.")
    if action not in ACTION_LABELS:
        raise _bad_action(action)

    current = decode_overrides(cookies.get(cookie_name))
    updated, label = apply_action(current, name, action)
    result = ManualActionResult(
        feature=name,
        action=action,
        message=f"feature {name} is now {label}",
    )
    return result, updated
