"""
Base measurement source and the record field names shared by all sources

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List

Record = Dict[str, Any]

KIND = "kind"
RESPONSE_TIME = "response_time"
DB_STATISTICS = "db_statistics"

TIMESTAMP = "timestamp"
RESPONSE_TIME_VALUE = "responseTime"
OPERATION = "operation"
PROCESS_ID = "processId"
NUM_QUERIES = "numQueries"
NUM_LOCK_WAITS = "numLockWaits"
LOCK_TIME = "lockTime"
NUM_USERS = "numUsers"


class MeasurementSource(ABC):

    @abstractmethod
    def records(self) -> List[Record]: ...

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records())

    def __len__(self) -> int:
        return len(self.records())
