"""Admin API routes."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from smartdine.domain.models.user import User
from smartdine.interfaces.api.deps import require_admin

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/health")
def admin_health(admin: User = Depends(require_admin)):
    return {
        "success": True,
        "message": "Admin routes are working",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
