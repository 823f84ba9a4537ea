"""
Routes initialization for API endpoints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.health import router as health_router
from api.routes.hiccups import router as hiccups_router
from api.routes.db import router as db_router

router = APIRouter()

router.include_router(health_router)
router.include_router(hiccups_router)
router.include_router(db_router)

__all__ = ["router"]
