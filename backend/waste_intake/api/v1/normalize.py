from typing import Any, Optional

from fastapi import APIRouter, Body, Query

from waste_intake.domain.normalize import normalize_request
from waste_intake.domain.schema import NormalizeResult

router = APIRouter(tags=["normalize"])


@router.post("/normalize", response_model=NormalizeResult)
def normalize(
    payload: Any = Body(default=None),
    seed: Optional[str] = Query(default=None),
) -> NormalizeResult:
    # Any JSON value is accepted; shape problems become warnings, not 422s.
    return normalize_request(payload, seed=seed)
