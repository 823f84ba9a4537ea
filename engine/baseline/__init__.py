"""
Baseline statistics (mean, population standard deviation) and the deviation threshold that a detection signal has to reach before a hiccup opens.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.baseline.compute import BaselineStats, compute, deviation_threshold

__all__ = ["BaselineStats", "compute", "deviation_threshold"]
