from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from user_service.db import Dynamodb, get_db
from user_service.models.schemas import (
    ApiResponse,
    LoginRequest,
    UserCreate,
    UserUpdate,
)
from user_service.pagination import decode_next_key, encode_next_key
from user_service.services.users import UserService

router = APIRouter()


def get_user_service(db: Dynamodb = Depends(get_db)) -> UserService:
    return UserService(db)


@router.get("", response_model=ApiResponse)
def get_users(
    limit: int = Query(20, ge=1, le=100),
    nextKey: Optional[str] = None,
    users: UserService = Depends(get_user_service),
):
    page = users.get_users(limit=limit, start_key=decode_next_key(nextKey))
    return {
        "data": {"items": page["items"], "nextKey": encode_next_key(page["nextKey"])},
        "message": f"Fetched {len(page['items'])} users",
        "success": True,
    }


@router.post("", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
def create_user(request: UserCreate, users: UserService = Depends(get_user_service)):
    user = users.create(request.model_dump())
    return {"data": user, "message": "User created", "success": True}


@router.post("/login", response_model=ApiResponse)
def login_user(request: LoginRequest, users: UserService = Depends(get_user_service)):
    user = users.login(request.email, request.password)
    return {"data": user, "message": "Login successful", "success": True}


@router.get("/{userId}", response_model=ApiResponse)
def get_user(userId: str, users: UserService = Depends(get_user_service)):
    return {"data": users.get_user(userId), "message": "Fetch user", "success": True}


@router.put("/{userId}", response_model=ApiResponse)
def update_user(
    userId: str, request: UserUpdate, users: UserService = Depends(get_user_service)
):
    user = users.update(userId, request.model_dump(exclude_none=True))
    return {"data": user, "message": "User updated", "success": True}


@router.delete("/{userId}", response_model=ApiResponse)
def delete_user(userId: str, users: UserService = Depends(get_user_service)):
    return {"data": users.delete_user(userId), "message": "User deleted", "success": True}


@router.post("/{userId}/avatar", response_model=ApiResponse)
def upload_avatar(
    userId: str,
    file: UploadFile = File(...),
    users: UserService = Depends(get_user_service),
):
    """Store an avatar image in S3 and record its key on the user."""
    user = users.set_avatar(
        userId,
        file.filename or "avatar",
        file.file.read(),
        file.content_type or "application/octet-stream",
    )
    return {"data": user, "message": "Avatar uploaded", "success": True}
