from fastapi import APIRouter, HTTPException, Depends, status
from primeproperty.schemas.auth import (
    RegisterRequest,
    LoginRequest,
    AuthResponse,
    UserResponse,
    ProfileUpdateRequest,
    PasswordChangeRequest,
)
from primeproperty.schemas.common import SuccessResponse
from primeproperty.services.auth_service import (
    register_user,
    authenticate_user,
    update_profile,
    change_password,
)
from primeproperty.utils.security import create_user_token
from primeproperty.utils.dependencies import get_current_user

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest):
    """Register a buyer or seller and sign them in"""
    try:
        user = await register_user(
            name=request.name,
            email=request.email,
            password=request.password,
            role=request.role,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return AuthResponse(user=UserResponse(**user), token=create_user_token(user))


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest):
    """Login and get an access token"""
    user = await authenticate_user(email=request.email, password=request.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    if user["status"] == "blocked":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is blocked"
        )

    return AuthResponse(user=UserResponse(**user), token=create_user_token(user))


@router.get("/profile", response_model=UserResponse)
async def get_profile(current_user: dict = Depends(get_current_user)):
    """Get the current user's profile"""
    return UserResponse(**current_user)


@router.put("/profile", response_model=UserResponse)
async def update_own_profile(
    request: ProfileUpdateRequest,
    current_user: dict = Depends(get_current_user)
):
    """Update own name and email"""
    try:
        updated = await update_profile(current_user["id"], request.dict(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    if not updated:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    return UserResponse(**updated)


@router.put("/password", response_model=SuccessResponse)
async def update_password(
    request: PasswordChangeRequest,
    current_user: dict = Depends(get_current_user)
):
    """Change password given the current one"""
    try:
        success = await change_password(
            user_id=current_user["id"],
            current_password=request.current_password,
            new_password=request.new_password,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    return SuccessResponse()
