"""
Series model holding timestamp/value samples in non-decreasing timestamp order.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import bisect
from typing import Callable, Iterable, Iterator, List, NamedTuple, Sequence, Tuple, Union, overload

import numpy as np

# (start_ms, end_ms) -> raw values with start_ms <= timestamp <= end_ms
RangeQuery = Callable[[int, int], Sequence[float]]


class Sample(NamedTuple):
    timestamp: int
    value: float


class Series:
    """Ordered samples; construct through from_pairs when input is unsorted."""

    __slots__ = ("_samples", "_timestamps")

    def __init__(self, samples: Iterable[Sample] = ()) -> None:
        self._samples: List[Sample] = [Sample(int(t), float(v)) for t, v in samples]
        self._timestamps: List[int] = [s.timestamp for s in self._samples]
        for prev, cur in zip(self._timestamps, self._timestamps[1:]):
            if cur < prev:
                raise ValueError("series timestamps must be non-decreasing")

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[float, float]]) -> Series:
        # stable sort keeps input order for duplicate timestamps
        samples = sorted((Sample(int(t), float(v)) for t, v in pairs), key=lambda s: s.timestamp)
        return cls(samples)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    @overload
    def __getitem__(self, index: int) -> Sample: ...

    @overload
    def __getitem__(self, index: slice) -> Series: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[Sample, Series]:
        if isinstance(index, slice):
            return Series(self._samples[index])
        return self._samples[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Series):
            return NotImplemented
        return self._samples == other._samples

    def __repr__(self) -> str:
        return f"Series({len(self._samples)} samples)"

    def timestamps(self) -> np.ndarray:
        return np.array(self._timestamps, dtype=np.int64)

    def values(self) -> np.ndarray:
        return np.array([s.value for s in self._samples], dtype=float)

    def pairs(self) -> List[Tuple[int, float]]:
        return [(s.timestamp, s.value) for s in self._samples]

    def subset(self, indices: Iterable[int]) -> Series:
        return Series(self._samples[i] for i in sorted(indices))

    def between(self, start: int, end: int) -> List[float]:
        lo = bisect.bisect_left(self._timestamps, start)
        hi = bisect.bisect_right(self._timestamps, end)
        return [s.value for s in self._samples[lo:hi]]
