from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz", summary="Liveness check")
async def healthz():
    return {"status": "ok"}
