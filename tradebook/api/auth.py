import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tradebook import storage
from tradebook.api.deps import SESSION_USER_KEY, get_current_user
from tradebook.db.database import get_db
from tradebook.models.user import User
from tradebook.schemas.user import CapitalUpdate, LoginRequest, RegisterRequest, UserOut
from tradebook.services.security import hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.post(
    "/register",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
)
async def register(
    payload: RegisterRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    """Create an account and log it in."""
    if await storage.get_user_by_username(db, payload.username):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already exists",
        )

    try:
        user = await storage.create_user(
            db,
            username=payload.username,
            password_hash=hash_password(payload.password),
            email=payload.email,
            first_name=payload.first_name,
            last_name=payload.last_name,
        )
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username or email already registered",
        )

    request.session[SESSION_USER_KEY] = user.id
    return user


@router.post("/login", response_model=UserOut)
async def login(
    payload: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    user = await storage.get_user_by_username(db, payload.username)
    if user is None or not verify_password(user.password_hash, payload.password):
        logger.info("failed login for username=%s", payload.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    request.session[SESSION_USER_KEY] = user.id
    return user


@router.post("/logout")
async def logout(request: Request):
    request.session.clear()
    return {"success": True}


# =================================================
# CURRENT USER
# =================================================
@router.get("/auth/user", response_model=UserOut)
async def current_user(user: User = Depends(get_current_user)):
    return user


@router.patch("/auth/user/capital", response_model=UserOut)
async def update_capital(
    payload: CapitalUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    updated = await storage.update_user_capital(db, user.id, payload.initial_capital)
    if updated is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return updated
