from pydantic import BaseModel
from primeproperty.schemas.auth import UserResponse
from primeproperty.schemas.common import UserRole, UserStatus


class AdminUserResponse(UserResponse):
    listing_count: int = 0


class UserRoleStatusUpdateRequest(BaseModel):
    # Both fields are required together; resend the unchanged one
    role: UserRole
    status: UserStatus


class AdminStatsResponse(BaseModel):
    total_properties: int
    pending_approval: int
    total_users: int
    total_sales: float
    reported_count: int
