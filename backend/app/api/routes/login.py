import logging
from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm

from app.api.deps import UserRepositoryDep, validation_failed
from app.core import security
from app.core.config import settings
from app.models.user import Message, NewPassword, Token
from app.services import account

logger = logging.getLogger(__name__)

router = APIRouter(tags=["login"])


@router.post("/login/access-token", response_model=Token)
def login_access_token(
    users: UserRepositoryDep, form_data: Annotated[OAuth2PasswordRequestForm, Depends()]
):
    """
    OAuth2 compatible token login, get an access token for future requests.
    The username field carries the account email.
    """
    user = users.find_by_email(form_data.username)
    if user is None or not account.validate_password(user, form_data.password):
        raise HTTPException(status_code=400, detail="Incorrect email or password")
    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return Token(
        access_token=security.create_access_token(
            user.id, user.auth_key, expires_delta=access_token_expires
        )
    )


@router.post("/password-recovery/{email}", response_model=Message)
def recover_password(email: str, users: UserRepositoryDep):
    """
    Issue a password reset token for an active account.
    """
    user = users.find_by_email(email)
    if user is not None:
        account.generate_password_reset_token(user)
        users.save(user)
        logger.info(f"Issued password reset token for user {user.id}")
        if settings.ENVIRONMENT == "local":
            logger.info(f"Password reset token for {email}: {user.password_reset_token}")
    # same answer either way so the endpoint can't be used to probe accounts
    return Message(message="If the account exists, a password recovery email has been sent")


@router.post("/reset-password/", response_model=Message)
def reset_password(body: NewPassword, users: UserRepositoryDep):
    """
    Reset password with a password reset token.
    """
    user = users.find_by_password_reset_token(body.token)
    if user is None:
        raise HTTPException(status_code=400, detail="Invalid token")
    errors = account.validate_new_password(body.new_password, body.new_password_repeat)
    if errors:
        raise validation_failed(errors)
    errors = account.change_password(user, body.new_password, users)
    if errors:
        raise validation_failed(errors)
    return Message(message="Password updated successfully")
