"""
Hiccup detection: a threshold-crossing segmenter shared by five interchangeable strategies and the dispatcher that selects one of them by key.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.hiccups.detector import detect
from engine.hiccups.segmenter import HiccupSegmenter, RunningSums
from engine.hiccups.strategies import DetectionResult

__all__ = ["DetectionResult", "HiccupSegmenter", "RunningSums", "detect"]
