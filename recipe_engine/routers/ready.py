from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/ready")
async def ready(request: Request):
    return {"ok": True, "version": request.app.version}
