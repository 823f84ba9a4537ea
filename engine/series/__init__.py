"""
Series types shared by every stage of hiccup detection: immutable timestamp/value samples kept in ascending timestamp order, with range queries used to re-read raw response times for detected intervals.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.series.model import RangeQuery, Sample, Series

__all__ = ["RangeQuery", "Sample", "Series"]
