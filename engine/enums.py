"""
Enumerations for detection strategies and hiccup segmentation states

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from engine.exceptions import UnknownStrategy

log = logging.getLogger(__name__)


class Strategy(str, Enum):
    moving_average = "MVAStrategy"
    noise_reduction = "NoiseReduction"
    noise_and_outlier = "NoiseAndOutlier"
    bucket_outlier = "BucketOutlierStrategy"
    center_of_gravity = "CenterOfGravityStrategy"

    @classmethod
    def from_key(cls, key: Optional[str], strict: bool = False) -> Strategy:
        # unknown keys fall back to the moving average strategy unless
        # the caller asks for strict resolution.
        text = str(key or "").strip()
        if not text:
            return cls.moving_average
        if text in _ALIASES:
            return _ALIASES[text]
        for member in cls:
            if text == member.value or text.lower() == member.name:
                return member
        if strict:
            raise UnknownStrategy(f"Unknown hiccup strategy: {text!r}")
        log.warning("unknown hiccup strategy %r, using %s", text, cls.moving_average.value)
        return cls.moving_average


_ALIASES = {
    "MovingCenterOfGravityStrategy": Strategy.center_of_gravity,
}


class SegmenterState(str, Enum):
    outside = "outside"
    inside_hiccup = "inside_hiccup"
