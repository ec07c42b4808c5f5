from collections.abc import Generator
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jwt.exceptions import InvalidTokenError
from pydantic import ValidationError
from sqlmodel import Session

from app.core import security
from app.core.config import settings
from app.core.db import engine
from app.core.validation import ValidationErrors
from app.data_access.user import SqlUserRepository
from app.models.user import TokenPayload, User
from app.services import account

reusable_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/login/access-token"
)
optional_oauth2 = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_V1_STR}/login/access-token", auto_error=False
)


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]
TokenDep = Annotated[str, Depends(reusable_oauth2)]
OptionalTokenDep = Annotated[str | None, Depends(optional_oauth2)]


def get_user_repository(session: SessionDep) -> SqlUserRepository:
    return SqlUserRepository(session)


UserRepositoryDep = Annotated[SqlUserRepository, Depends(get_user_repository)]


def _user_from_token(users: SqlUserRepository, token: str) -> User:
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[security.ALGORITHM]
        )
        token_data = TokenPayload(**payload)
    except (InvalidTokenError, ValidationError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )
    if token_data.sub is None or not token_data.sub.isdigit():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )
    user = users.find_identity(int(token_data.sub))
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    # password change rotates the auth key and ends older sessions
    if not account.validate_auth_key(user, token_data.ak):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )
    return user


def get_current_user(users: UserRepositoryDep, token: TokenDep) -> User:
    return _user_from_token(users, token)


def get_optional_user(users: UserRepositoryDep, token: OptionalTokenDep) -> User | None:
    if not token:
        return None
    return _user_from_token(users, token)


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]


def get_current_active_superuser(current_user: CurrentUser) -> User:
    if not current_user.is_admin:
        raise HTTPException(
            status_code=403, detail="The user doesn't have enough privileges"
        )
    return current_user


SuperUser = Annotated[User, Depends(get_current_active_superuser)]


def validation_failed(errors: ValidationErrors) -> HTTPException:
    return HTTPException(
        status_code=422, detail=errors.as_dict()
    )
