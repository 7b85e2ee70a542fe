# tradejournal/routers/users.py
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status

from tradejournal.config import settings
from tradejournal.database import get_trade_store, users_collection
from tradejournal.models.user_model import (
    PasswordChange,
    Token,
    UserCreate,
    UserInDB,
    UserLogin,
    UserResponse,
    UserUpdate,
)
from tradejournal.storage.base import TradeStore
from tradejournal.utils.auth import (
    create_access_token,
    get_current_active_user,
    get_password_hash,
    verify_password,
)
from tradejournal.utils.helpers import utcnow
from tradejournal.utils.logger import logger

router = APIRouter()


def public_user(user: dict) -> UserResponse:
    user.pop("hashed_password", None)
    user.pop("_id", None)
    return UserResponse(**user)


@router.post(
    "/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED
)
async def register_user(user: UserCreate):
    """Register a new user"""
    if await users_collection.find_one({"email": user.email}):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered"
        )

    if await users_collection.find_one({"username": user.username}):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Username already taken"
        )

    user_in_db = UserInDB(
        email=user.email,
        username=user.username,
        full_name=user.full_name,
        hashed_password=get_password_hash(user.password),
    )
    result = await users_collection.insert_one(user_in_db.model_dump())
    created_user = await users_collection.find_one({"_id": result.inserted_id})

    logger.info(f"Registered user {user.username}")
    return public_user(created_user)


@router.post("/login", response_model=Token)
async def login(user_credentials: UserLogin):
    """Login and get access token"""
    user = await users_collection.find_one({"email": user_credentials.email})

    if not user or not verify_password(
        user_credentials.password, user["hashed_password"]
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.get("is_active", True):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user"
        )

    await users_collection.update_one(
        {"email": user_credentials.email}, {"$set": {"last_login": utcnow()}}
    )

    access_token = create_access_token(
        data={"sub": user["email"]},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: dict = Depends(get_current_active_user)):
    """Get current user information"""
    return public_user(current_user)


@router.put("/me", response_model=UserResponse)
async def update_current_user(
    user_update: UserUpdate, current_user: dict = Depends(get_current_active_user)
):
    """Update current user information"""
    update_data = user_update.model_dump(exclude_none=True)
    update_data["updated_at"] = utcnow()

    await users_collection.update_one(
        {"email": current_user["email"]}, {"$set": update_data}
    )

    updated_user = await users_collection.find_one({"email": current_user["email"]})
    return public_user(updated_user)


@router.post("/change-password")
async def change_password(
    password_change: PasswordChange,
    current_user: dict = Depends(get_current_active_user),
):
    """Change user password"""
    if not verify_password(
        password_change.old_password, current_user["hashed_password"]
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Incorrect password"
        )

    await users_collection.update_one(
        {"email": current_user["email"]},
        {
            "$set": {
                "hashed_password": get_password_hash(password_change.new_password),
                "updated_at": utcnow(),
            }
        },
    )

    return {"message": "Password changed successfully"}


@router.delete("/me")
async def delete_current_user(
    current_user: dict = Depends(get_current_active_user),
    store: TradeStore = Depends(get_trade_store),
):
    """Delete current user account and every trade it owns"""
    removed = await store.delete_all(current_user["_id"])
    await users_collection.delete_one({"email": current_user["email"]})

    logger.info(f"Deleted user {current_user['email']} and {removed} trades")
    return {"message": "User account deleted successfully"}
