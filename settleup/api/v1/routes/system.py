from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from settleup.db.session import get_db
from settleup.schemas.system import DbHealthOut, HealthOut, MetricsOut
from settleup.services.system_services import check_db_service, system_health, system_metrics

router = APIRouter()

@router.get("/health", response_model=HealthOut)
async def service_health():
    return await system_health()

@router.get("/health/db", response_model=DbHealthOut, response_model_exclude_none=True)
async def database_health():
    return await check_db_service()

# Row counts of the ledger tables.
@router.get("/metrics", response_model=MetricsOut)
async def ledger_metrics(db: AsyncSession = Depends(get_db)):
    return await system_metrics(db)
