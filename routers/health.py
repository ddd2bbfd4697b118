# routers/health.py
from fastapi import APIRouter, Depends

from deps.sessions import get_store
from schemas.sessions import HealthOut
from store import SessionStore

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live", response_model=HealthOut)
def health_live(sessions: SessionStore = Depends(get_store)):
    return {"ok": True, "sessions": len(sessions)}
