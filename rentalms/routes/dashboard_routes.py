from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rentalms.database import get_db
from rentalms.services.dashboard_service import DashboardService
from rentalms.schemas.dashboard_schemas import DashboardResponse

router = APIRouter()


@router.get("/", response_model=DashboardResponse)
def get_dashboard(db: Session = Depends(get_db)):
    """
    Dashboard summary.

    - Property and unit counts (with occupied/vacant split)
    - Active tenant count
    - Most recent payments
    """
    service = DashboardService(db)
    return service.get_summary()
