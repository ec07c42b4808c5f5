import logging

from fastapi import APIRouter, HTTPException

from app.api.deps import CurrentUser, UserRepositoryDep, validation_failed
from app.core.config import settings
from app.models.user import Message, UpdatePassword, User, UserPublic, UserRegister
from app.services import account

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/signup", response_model=UserPublic)
def register_user(user_in: UserRegister, users: UserRepositoryDep):
    """
    Create a new account in the Registered state; it needs activation before login.
    """
    errors = account.validate_registration(user_in)
    if errors:
        raise validation_failed(errors)
    user = User(email=user_in.email)
    errors = account.register(user, user_in.password, users)
    if errors:
        raise validation_failed(errors)
    if settings.ENVIRONMENT == "local":
        logger.info(f"Activation token for {user.email}: {user.activation_token}")
    return user


@router.post("/activate/{token}", response_model=Message)
def activate_user(token: str, users: UserRepositoryDep):
    user = users.find_by_activation_token(token)
    if user is None:
        raise HTTPException(status_code=400, detail="The provided activation token is wrong or expired.")
    if not account.activate(user, users):
        raise HTTPException(status_code=400, detail="Sorry! There was some error while activating your account.")
    return Message(message="Your account has been activated.")


@router.get("/me", response_model=UserPublic)
def read_user_me(current_user: CurrentUser):
    return current_user


@router.patch("/me/password", response_model=Message)
def update_password_me(body: UpdatePassword, current_user: CurrentUser, users: UserRepositoryDep):
    if not account.validate_password(current_user, body.current_password):
        raise HTTPException(status_code=400, detail="Incorrect password")
    errors = account.validate_new_password(body.new_password, body.new_password_repeat)
    if errors:
        raise validation_failed(errors)
    errors = account.change_password(current_user, body.new_password, users)
    if errors:
        raise validation_failed(errors)
    return Message(message="Password updated successfully")
