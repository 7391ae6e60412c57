"""
Account API routes — signup, login, delete, update, onboarding, profile.

Mounted at the application root.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from auth.dependencies import (
    get_current_identity,
    get_password_hasher,
    get_token_issuer,
    get_user_store,
)
from auth.jwt import TokenClaims, TokenIssuer
from auth.password import PasswordHasher, PasswordHashError
from auth.schemas import (
    CreateUserRequest,
    DeleteUserRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    OnboardingAnswers,
    UpdateUserRequest,
    UserResponse,
)
from database.models import User
from database.users import UserStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ── Helpers ────────────────────────────────────────────────────────────


async def _authenticate(
    store: UserStore, hasher: PasswordHasher, email: str, password: str,
) -> User:
    """Look up ``email`` and check ``password`` against the stored hash."""
    user = await store.find_by_email(email)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    try:
        matches = hasher.verify(password, user.password_hash)
    except PasswordHashError:
        logger.exception("Could not compare password for user %s", user.user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error comparing passwords",
        )

    if not matches:
        logger.info("Incorrect password for user %s", user.user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect password",
        )
    return user


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/createUser", response_model=MessageResponse)
async def create_user(
    req: CreateUserRequest,
    store: UserStore = Depends(get_user_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> MessageResponse:
    """Register a new user. No token is issued; call /login afterwards."""
    if await store.find_by_email(req.email) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already exists",
        )

    user = User(
        email=req.email,
        password_hash=hasher.hash(req.password),
        full_name=req.full_name,
        username=req.username,
        created_at=datetime.now(timezone.utc),
        role="user",
        onboarding=False,
        color=random.randint(1, 7),
        notifications=[],
        projects=[],
        docs=[],
    )
    user = await store.insert(user)
    logger.info("Created user %s", user.user_id)

    return MessageResponse(message="User created successfully")


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    store: UserStore = Depends(get_user_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> LoginResponse:
    """Login with email + password and receive a bearer token."""
    user = await _authenticate(store, hasher, req.email, req.password)

    token = issuer.issue(
        TokenClaims(email=user.email, user_id=str(user.user_id)),
        ttl=issuer.ttl_for(req.keep_me_signed_in),
    )
    logger.info("Login: %s (keep signed in: %s)", user.user_id, req.keep_me_signed_in)

    return LoginResponse(message="Login successful", token=token)


@router.delete("/deleteUser", response_model=MessageResponse)
async def delete_user(
    req: DeleteUserRequest,
    store: UserStore = Depends(get_user_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> MessageResponse:
    """Delete an account after re-checking its password."""
    user = await _authenticate(store, hasher, req.email, req.password)

    await store.delete(user.user_id)
    logger.info("Deleted user %s", user.user_id)

    return MessageResponse(message="User deleted successfully")


@router.post("/updateUser", response_model=MessageResponse)
async def update_user(
    req: UpdateUserRequest,
    identity: TokenClaims = Depends(get_current_identity),
    store: UserStore = Depends(get_user_store),
) -> MessageResponse:
    existing = await store.find_by_email(req.email)
    if existing is not None and str(existing.user_id) != identity.user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email is already taken by another user",
        )

    await store.update_fields(
        identity.user_id,
        full_name=req.full_name,
        email=req.email,
        color=req.color,
    )
    logger.info("Updated user %s", identity.user_id)

    return MessageResponse(message="User updated successfully")


@router.post("/submitOnboardingAnswers", response_model=MessageResponse)
async def submit_onboarding_answers(
    answers: OnboardingAnswers,
    identity: TokenClaims = Depends(get_current_identity),
    store: UserStore = Depends(get_user_store),
) -> MessageResponse:
    await store.update_fields(
        identity.user_id,
        **answers.model_dump(exclude_unset=True),
        onboarding=True,
    )
    logger.info("Onboarding completed for user %s", identity.user_id)

    return MessageResponse(message="Onboarding answers submitted")


@router.get("/getUser", response_model=UserResponse)
async def get_user(
    identity: TokenClaims = Depends(get_current_identity),
    store: UserStore = Depends(get_user_store),
) -> UserResponse:
    """Return the caller's own record, minus the password hash."""
    user = await store.get(identity.user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return UserResponse.from_user(user)
