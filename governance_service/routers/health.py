from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from governance_service.config import build_sqlalchemy_db_url, settings
from governance_service.database import get_db, mask_db_url
from governance_service.schemas.statistics import HealthStatus
from governance_service.services.statistics_service import check_database


router = APIRouter()


@router.get("/actuator/health", response_model=HealthStatus, summary="API heartbeat", tags=["health"])
def health_check(db: Session = Depends(get_db)) -> HealthStatus:
    db_status = check_database(db)
    components: dict = {"db": {"status": db_status}}
    if settings.debug:
        # Only expose the (masked) connection target outside production.
        components["db"]["url"] = mask_db_url(build_sqlalchemy_db_url(settings))
    return HealthStatus(
        status="UP" if db_status == "UP" else "DOWN",
        timestamp=datetime.now(timezone.utc),
        components=components,
    )

