from fastapi import APIRouter, HTTPException, Depends, status
from typing import List
from primeproperty.schemas.admin import AdminUserResponse, UserRoleStatusUpdateRequest, AdminStatsResponse
from primeproperty.schemas.announcement import AnnouncementCreateRequest, AnnouncementResponse
from primeproperty.schemas.common import SuccessResponse
from primeproperty.schemas.payment import PaymentResponse
from primeproperty.schemas.property import PropertyResponse, FeatureRequest
from primeproperty.schemas.report import ReportResponse
from primeproperty.services.admin_service import get_all_users, set_user_role_and_status, delete_user
from primeproperty.services.admin_dashboard_service import get_admin_dashboard_stats
from primeproperty.services.announcement_service import create_announcement
from primeproperty.services.payment_service import get_all_payments
from primeproperty.services.property_service import get_all_properties, approve_property, set_property_featured
from primeproperty.services.report_service import get_reports, dismiss_report, resolve_report_by_removal
from primeproperty.utils.dependencies import get_current_admin
from primeproperty.utils.exceptions import NotFoundError

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/stats", response_model=AdminStatsResponse)
async def get_stats(admin: dict = Depends(get_current_admin)):
    """Platform counters (Admin only)"""
    stats = await get_admin_dashboard_stats()
    return AdminStatsResponse(**stats)


@router.get("/users", response_model=List[AdminUserResponse])
async def list_users(admin: dict = Depends(get_current_admin)):
    """All users with their listing counts (Admin only)"""
    users = await get_all_users()
    return [AdminUserResponse(**user) for user in users]


@router.put("/users/{user_id}", response_model=AdminUserResponse)
async def update_user(
    user_id: int,
    request: UserRoleStatusUpdateRequest,
    admin: dict = Depends(get_current_admin)
):
    """Set role and status together (Admin only)"""
    try:
        user = await set_user_role_and_status(user_id, request.role, request.status)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return AdminUserResponse(**user)


@router.delete("/users/{user_id}", response_model=SuccessResponse)
async def remove_user(user_id: int, admin: dict = Depends(get_current_admin)):
    """Hard delete a user; their listings stay (Admin only)"""
    try:
        await delete_user(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return SuccessResponse()


@router.get("/pending", response_model=List[PropertyResponse])
async def list_pending_properties(admin: dict = Depends(get_current_admin)):
    """Listings waiting for approval (Admin only)"""
    props = await get_all_properties(pending_only=True)
    return [PropertyResponse(**prop) for prop in props]


@router.get("/properties", response_model=List[PropertyResponse])
async def list_all_properties(admin: dict = Depends(get_current_admin)):
    """Every listing regardless of state (Admin only)"""
    props = await get_all_properties()
    return [PropertyResponse(**prop) for prop in props]


@router.post("/approve/{property_id}", response_model=PropertyResponse)
async def approve(property_id: int, admin: dict = Depends(get_current_admin)):
    """Make a listing publicly searchable (Admin only)"""
    try:
        prop = await approve_property(property_id, admin)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return PropertyResponse(**prop)


@router.put("/properties/{property_id}/feature", response_model=PropertyResponse)
async def feature_property(
    property_id: int,
    request: FeatureRequest,
    admin: dict = Depends(get_current_admin)
):
    """Feature or unfeature a listing without a payment (Admin only)"""
    try:
        prop = await set_property_featured(property_id, admin, request.is_featured)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return PropertyResponse(**prop)


@router.get("/payments", response_model=List[PaymentResponse])
async def list_payments(admin: dict = Depends(get_current_admin)):
    """Payment ledger (Admin only)"""
    payments = await get_all_payments()
    return [PaymentResponse(**payment) for payment in payments]


@router.get("/reports", response_model=List[ReportResponse])
async def list_reports(include_resolved: bool = False, admin: dict = Depends(get_current_admin)):
    """Open reports, or all of them with include_resolved (Admin only)"""
    reports = await get_reports(include_resolved=include_resolved)
    return [ReportResponse(**report) for report in reports]


@router.post("/reports/{report_id}/dismiss", response_model=ReportResponse)
async def dismiss(report_id: int, admin: dict = Depends(get_current_admin)):
    """Close a report and keep the listing (Admin only)"""
    try:
        report = await dismiss_report(report_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return ReportResponse(**report)


@router.post("/reports/{report_id}/resolve", response_model=ReportResponse)
async def resolve(report_id: int, admin: dict = Depends(get_current_admin)):
    """Close a report by deleting the reported listing (Admin only)"""
    try:
        report = await resolve_report_by_removal(report_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return ReportResponse(**report)


@router.post("/announcements", response_model=AnnouncementResponse, status_code=status.HTTP_201_CREATED)
async def post_announcement(
    request: AnnouncementCreateRequest,
    admin: dict = Depends(get_current_admin)
):
    """Publish an announcement (Admin only)"""
    announcement = await create_announcement(admin["id"], request.title, request.content)
    return AnnouncementResponse(**announcement)
