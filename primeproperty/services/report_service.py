"""
Report Service - user flags against listings and their resolution

A report is open until an admin either dismisses it or resolves it by
deleting the reported listing.
"""
from datetime import datetime, timezone
from typing import List, Optional
import logging
from sqlalchemy import select, desc
from primeproperty.database.connection import AsyncSessionLocal
from primeproperty.models.property import Property
from primeproperty.models.report import Report
from primeproperty.models.user import User
from primeproperty.utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def report_to_dict(report: Report, property_title: Optional[str] = None, user_name: Optional[str] = None) -> dict:
    return {
        "id": report.id,
        "property_id": report.property_id,
        "user_id": report.user_id,
        "reason": report.reason,
        "is_resolved": bool(report.is_resolved),
        "resolved_at": report.resolved_at.isoformat() if report.resolved_at else None,
        "property_title": property_title,
        "user_name": user_name,
        "created_at": report.created_at.isoformat() if report.created_at else "",
    }


async def create_report(property_id: int, user_id: int, reason: str) -> dict:
    async with AsyncSessionLocal() as session:
        prop_result = await session.execute(select(Property.title).where(Property.id == property_id))
        title = prop_result.scalar_one_or_none()
        if title is None:
            raise NotFoundError("Property not found")

        report = Report(property_id=property_id, user_id=user_id, reason=reason, is_resolved=False)
        session.add(report)
        await session.commit()
        await session.refresh(report)

        logger.info(f"Report {report.id} filed against property {property_id} by user {user_id}")
        return report_to_dict(report, property_title=title)


async def get_reports(include_resolved: bool = False) -> List[dict]:
    async with AsyncSessionLocal() as session:
        stmt = (
            select(Report, Property.title, User.name)
            .outerjoin(Property, Property.id == Report.property_id)
            .outerjoin(User, User.id == Report.user_id)
            .order_by(desc(Report.created_at), desc(Report.id))
        )
        if not include_resolved:
            stmt = stmt.where(Report.is_resolved == False)  # noqa: E712

        result = await session.execute(stmt)
        return [
            report_to_dict(report, property_title=title, user_name=user_name)
            for report, title, user_name in result.all()
        ]


async def dismiss_report(report_id: int) -> dict:
    """Close a report without touching the listing"""
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Report).where(Report.id == report_id))
        report = result.scalar_one_or_none()
        if not report:
            raise NotFoundError("Report not found")

        if not report.is_resolved:
            report.is_resolved = True
            report.resolved_at = datetime.now(timezone.utc)
            await session.commit()
            await session.refresh(report)
            logger.info(f"Report {report_id} dismissed")

        return report_to_dict(report)


async def resolve_report_by_removal(report_id: int) -> dict:
    """Delete the reported listing and close every open report against it"""
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Report).where(Report.id == report_id))
        report = result.scalar_one_or_none()
        if not report:
            raise NotFoundError("Report not found")

        prop_result = await session.execute(
            select(Property).where(Property.id == report.property_id).with_for_update()
        )
        prop = prop_result.scalar_one_or_none()
        if prop:
            await session.delete(prop)

        now = datetime.now(timezone.utc)
        open_result = await session.execute(
            select(Report).where(
                Report.property_id == report.property_id,
                Report.is_resolved == False  # noqa: E712
            )
        )
        for open_report in open_result.scalars().all():
            open_report.is_resolved = True
            open_report.resolved_at = now

        await session.commit()
        await session.refresh(report)

        logger.info(f"Report {report_id} resolved, property {report.property_id} removed")
        return report_to_dict(report)
