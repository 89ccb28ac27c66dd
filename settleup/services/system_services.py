from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from settleup.db.session import engine
from settleup.models.expense import Expense
from settleup.models.group import Group
from settleup.models.settlement import Settlement

async def check_db_service():
    try:
        async with engine.connect() as conn:
            await conn.exec_driver_sql("SELECT 1")
        return {"db": True, "message": "Database is connected"}
    except SQLAlchemyError as e:
        return {"db": False, "error": str(e)}

async def system_health():
    return {
        "status": "ok"
    }

async def system_metrics(db: AsyncSession):
    groups_q = select(func.count(Group.id))
    expenses_q = select(func.count(Expense.id))
    settlements_q = select(func.count(Settlement.id))

    return {
        "groups": await db.scalar(groups_q),
        "expenses": await db.scalar(expenses_q),
        "settlements": await db.scalar(settlements_q),
    }
