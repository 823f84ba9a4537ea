from __future__ import annotations

from typing import List

from fastapi import APIRouter

from api.requests import DBOverheadRequest, LockRequest
from api.responses import DBOverheadReport, LockStatistics
from api.routes.exception import handle_exceptions
from services.analyze_service import run_db_overhead, run_lock_statistics

router = APIRouter(tags=["Database"])


@router.post("/db/overhead", response_model=DBOverheadReport, summary="Attribute DB queries to requests")
@handle_exceptions
async def db_overhead(req: DBOverheadRequest) -> DBOverheadReport:
    return run_db_overhead(req)


@router.post("/db/locks", response_model=List[LockStatistics], summary="Lock statistics per user count")
@handle_exceptions
async def db_locks(req: LockRequest) -> List[LockStatistics]:
    return run_lock_statistics(req)
