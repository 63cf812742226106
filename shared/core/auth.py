from datetime import datetime, timedelta, timezone
from fastapi import status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from shared.core.config import settings
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response
from shared.utils.app_status_code import AppStatusCode

security = HTTPBearer()

ADMIN_ACCOUNT_TYPE = "admin"


def create_access_token(data: dict, expires_minutes: int | None = None):
    payload = data.copy()
    if expires_minutes is not None:
        payload["exp"] = datetime.now(timezone.utc) + \
            timedelta(minutes=expires_minutes)
    return jwt.encode(payload, settings.JWT_SECRET,
                      algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> UserToken:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
        return UserToken(**payload)
    except JWTError:
        return error_response(
            message="Invalid or expired token",
            status_code=str(AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED),
            http_status=status.HTTP_401_UNAUTHORIZED
        )
    except PydanticValidationError:
        return error_response(
            message="Invalid token structure",
            status_code=str(AppStatusCode.AUTHENTICATION_TOKEN_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )


def validate_current_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> UserToken:
    return verify_token(credentials.credentials)


def allow_admin(current_user: UserToken = Depends(validate_current_token)):
    if current_user.account_type.lower() != ADMIN_ACCOUNT_TYPE:
        return error_response(
            message="Access forbidden: Admins only",
            status_code=str(AppStatusCode.UNAUTHORIZED_ACTION),
            http_status=403
        )

    return current_user
