from sqlalchemy import select, func, case
from primeproperty.database.connection import AsyncSessionLocal
from primeproperty.models.user import User
from primeproperty.models.property import Property
from primeproperty.models.payment import Payment
from primeproperty.models.report import Report


async def get_admin_dashboard_stats() -> dict:
    """Platform counters for the admin console, computed with database aggregations"""
    async with AsyncSessionLocal() as session:
        property_stats_stmt = select(
            func.count(Property.id).label('total'),
            func.sum(case((Property.is_approved == False, 1), else_=0)).label('pending')  # noqa: E712
        )
        property_stats = (await session.execute(property_stats_stmt)).first()

        total_users = (await session.execute(select(func.count(User.id)))).scalar_one() or 0

        total_sales_stmt = select(func.coalesce(func.sum(Payment.amount), 0)).where(
            Payment.status == "completed"
        )
        total_sales = (await session.execute(total_sales_stmt)).scalar_one() or 0

        reported_stmt = select(func.count(Report.id)).where(Report.is_resolved == False)  # noqa: E712
        reported_count = (await session.execute(reported_stmt)).scalar_one() or 0

        return {
            "total_properties": property_stats.total or 0,
            "pending_approval": int(property_stats.pending or 0),
            "total_users": total_users,
            "total_sales": float(total_sales),
            "reported_count": reported_count,
        }
