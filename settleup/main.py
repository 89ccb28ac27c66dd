from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from settleup.api.v1.routes.expense import router as expense_router
from settleup.api.v1.routes.group import router as group_router
from settleup.api.v1.routes.ledger import router as ledger_router
from settleup.api.v1.routes.settlement import router as settlement_router
from settleup.api.v1.routes.system import router as system_router
from settleup.core.config import settings
from settleup.core.db_check import create_tables, wait_for_db
from settleup.core.errors import LedgerError
from settleup.core.log import setup_logging

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    await wait_for_db()
    if settings.CREATE_TABLES:
        await create_tables()
    yield

app = FastAPI(title="SettleUp Backend", lifespan=lifespan)

@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "detail": exc.message},
    )

@app.get("/")
async def root():
    return {"message": "SettleUp Backend is live"}

app.include_router(system_router, prefix="/api/v1/system")
app.include_router(ledger_router, prefix="/api/v1/ledger")
app.include_router(group_router, prefix="/api/v1/groups")
app.include_router(expense_router, prefix="/api/v1/expenses")
app.include_router(settlement_router, prefix="/api/v1/settlements")
