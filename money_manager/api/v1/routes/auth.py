# money_manager/api/v1/routes/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from fastapi_users.exceptions import InvalidPasswordException, UserAlreadyExists

from money_manager.api.deps import get_current_user
from money_manager.core.auth import UserCreate, UserManager, get_jwt_strategy, get_user_manager
from money_manager.core.exceptions import ConflictError
from money_manager.models.user import User
from money_manager.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserPublic

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


async def _auth_response(user: User) -> AuthResponse:
    token = await get_jwt_strategy().write_token(user)
    return AuthResponse(token=token, user=UserPublic.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    request: Request,
    user_manager: UserManager = Depends(get_user_manager),
):
    """Create an account (with its default categories) and return a bearer token."""
    try:
        user = await user_manager.create(
            UserCreate(email=payload.email, password=payload.password, name=payload.name),
            safe=True,
            request=request,
        )
    except UserAlreadyExists:
        raise ConflictError("User already exists with this email")
    except InvalidPasswordException as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.reason)
    return await _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    user_manager: UserManager = Depends(get_user_manager),
):
    credentials = OAuth2PasswordRequestForm(username=payload.email, password=payload.password)
    user = await user_manager.authenticate(credentials)
    if user is None or not user.is_active:
        logger.info(f"Failed login attempt for {payload.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    return await _auth_response(user)


@router.get("/me", response_model=UserPublic)
async def read_current_user(user: User = Depends(get_current_user)):
    """Session info for the bearer token"""
    return user
