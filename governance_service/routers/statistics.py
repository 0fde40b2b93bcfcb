from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from governance_service.database import get_db
from governance_service.schemas.statistics import SystemStatistics
from governance_service.services.statistics_service import get_statistics


router = APIRouter(tags=["statistics"])


@router.get("/statistics", response_model=SystemStatistics, summary="Dashboard totals")
def read_statistics(db: Session = Depends(get_db)) -> SystemStatistics:
    return get_statistics(db)
