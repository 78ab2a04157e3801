"""User record endpoints. All of them require a bearer token."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_user_id, get_user_store
from src.exceptions import UserNotFoundError
from src.schemas.user import MessageResponse, UserResponse, UserUpdate, UserUpdateResponse
from src.services.user_store import UserStore

router = APIRouter(
    tags=["users"],
    dependencies=[Depends(get_current_user_id)],
    responses={401: {"description": "Invalid or missing token"}},
)


@router.get("/users", response_model=list[UserResponse])
def list_users(
    store: Annotated[UserStore, Depends(get_user_store)],
):
    """Get all users."""
    return store.list_all()


@router.get(
    "/getUser/{user_id}",
    response_model=UserResponse,
    responses={404: {"description": "User not found"}},
)
def get_user(
    user_id: int,
    store: Annotated[UserStore, Depends(get_user_store)],
):
    """Get a user by id."""
    user = store.find_by_id(user_id)
    if user is None:
        raise UserNotFoundError()
    return user


@router.put(
    "/updateUser/{user_id}",
    response_model=UserUpdateResponse,
    responses={404: {"description": "User not found"}},
)
def update_user(
    user_id: int,
    user_data: UserUpdate,
    store: Annotated[UserStore, Depends(get_user_store)],
):
    """Update a user's name, phone number and address.

    Fields that are omitted, null or empty keep their current value.
    """
    user = store.update(user_id, user_data.model_dump(exclude_unset=True))
    if user is None:
        raise UserNotFoundError()

    return UserUpdateResponse(
        message="User updated successfully",
        user=UserResponse.model_validate(user),
    )


@router.delete(
    "/deleteUser/{user_id}",
    response_model=MessageResponse,
    responses={404: {"description": "User not found"}},
)
def delete_user(
    user_id: int,
    store: Annotated[UserStore, Depends(get_user_store)],
):
    """Delete a user by id."""
    if not store.delete(user_id):
        raise UserNotFoundError()
    return MessageResponse(message="User deleted successfully")
