from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, Field


class DetectRequest(BaseModel):
    samples: List[Tuple[int, float]] = Field(default_factory=list)
    properties: Dict[str, Any] = Field(default_factory=dict)


class AnalyzeRequest(BaseModel):
    records: List[Dict[str, Any]] = Field(default_factory=list)
    properties: Dict[str, Any] = Field(default_factory=dict)
    export: bool = False


class DBOverheadRequest(BaseModel):
    records: List[Dict[str, Any]] = Field(default_factory=list)
    excluded_operations: Optional[List[str]] = None


class LockRequest(BaseModel):
    records: List[Dict[str, Any]] = Field(default_factory=list)
    export: bool = False
