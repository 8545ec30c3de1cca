"""
Container — creates and holds singletons.

Provides:
- registry: the process-wide flag engine (read-only after startup)
- flip: the FeatureFlip extension bound to that registry
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from app.config import Settings
from app.feature_flags import FeatureFlip, FlipOptions
from service import UserLoader
from service.registry import FeatureRegistry


@dataclass
class Container:
    settings: Settings
    registry: Optional[FeatureRegistry] = None
    user_loader: Optional[UserLoader] = None
    # Filled during __post_init__
    flip: Optional[FeatureFlip] = None

    def __post_init__(self):
        if self.registry is None:
            self.registry = FeatureRegistry.from_mapping(self.settings.parse_flags())

        self.flip = FeatureFlip(
            self.registry,
            FlipOptions.from_settings(self.settings),
            user_loader=self.user_loader,
        )
