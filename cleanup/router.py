from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from core.database import get_db
from authz.deps import require_admin
from .service import sweeper

cleanup_router = APIRouter(prefix="/cleanup", tags=["Cleanup"])


class CleanupResult(BaseModel):
    message: str
    shifts_deleted: int
    requests_deactivated: int
    interests_deactivated: int


@cleanup_router.post("", response_model=CleanupResult)
def run_cleanup(db: Session = Depends(get_db), _admin = Depends(require_admin)):
    result = sweeper.run_now(db)
    return CleanupResult(message="Cleanup completed successfully", **result.as_dict())
