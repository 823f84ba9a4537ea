"""
Correlation of application request events with independently sampled database activity: sweep-line attribution of DB queries to individual requests, per user-count lock statistics and a DB versus client throughput comparison.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.correlation.db_activity import (
    DBSample,
    RequestEvent,
    analyze_db_overhead,
    attribute_db_operations,
    operation_stats,
)
from engine.correlation.locks import LockSample, lock_statistics
from engine.correlation.throughput import compare_throughput

__all__ = [
    "DBSample",
    "LockSample",
    "RequestEvent",
    "analyze_db_overhead",
    "attribute_db_operations",
    "compare_throughput",
    "lock_statistics",
    "operation_stats",
]
