from fastapi import APIRouter

from waste_intake.api.v1.normalize import router as normalize_router

router = APIRouter()


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


router.include_router(normalize_router)
