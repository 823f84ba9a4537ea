"""
In-memory measurement dataset with a chainable parameter selection.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, Set, Tuple

from datasources.base import KIND, MeasurementSource, Record
from datasources.exceptions import InvalidQuery


class Dataset(MeasurementSource):
    """Immutable list of dict records. Selections return new datasets."""

    def __init__(self, records: Optional[Iterable[Record]] = None):
        self._records: List[Record] = [dict(r) for r in (records or [])]

    def records(self) -> List[Record]:
        return list(self._records)

    def filter(self, predicate: Callable[[Record], bool]) -> "Dataset":
        return Dataset(r for r in self._records if predicate(r))

    def kind(self, kind: str) -> "Dataset":
        return self.filter(lambda r: r.get(KIND) == kind)

    def value_set(self, key: str) -> Set[Any]:
        return {r[key] for r in self._records if key in r}

    def values(self, key: str, cast: Optional[Callable[[Any], Any]] = None) -> List[Any]:
        out = []
        for r in self._records:
            if key not in r:
                raise InvalidQuery(f"record has no field {key!r}")
            out.append(cast(r[key]) if cast else r[key])
        return out


class Selection:
    """Conjunction of per-field conditions, applied with :meth:`apply_to`."""

    def __init__(self):
        self._conditions: List[Tuple[str, Callable[[Any], bool]]] = []

    def select(self, key: str, value: Any) -> "Selection":
        self._conditions.append((key, lambda v, value=value: v == value))
        return self

    def unequal(self, key: str, value: Any) -> "Selection":
        self._conditions.append((key, lambda v, value=value: v != value))
        return self

    def between(self, key: str, lo: Any, hi: Any) -> "Selection":
        if lo > hi:
            raise InvalidQuery(f"empty range for {key!r}: {lo} > {hi}")
        self._conditions.append((key, lambda v, lo=lo, hi=hi: lo <= v <= hi))
        return self

    def _matches(self, record: Record) -> bool:
        for key, test in self._conditions:
            if key not in record or not test(record[key]):
                return False
        return True

    def apply_to(self, dataset: Dataset) -> Dataset:
        return dataset.filter(self._matches)
