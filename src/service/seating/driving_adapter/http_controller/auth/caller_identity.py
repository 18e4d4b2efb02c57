"""
Caller identity

The caller is whoever the X-User-Id header says it is. Verifying that claim belongs to
a gateway in front of this service.
"""

from typing import Optional

from fastapi import Header

from src.platform.exception.exceptions import AuthenticationError, DomainError


USER_ID_HEADER = 'X-User-Id'
MAX_USER_ID_LENGTH = 255


def _normalize(raw: Optional[str]) -> Optional[str]:
    user_id = (raw or '').strip()
    if not user_id:
        return None
    if len(user_id) > MAX_USER_ID_LENGTH:
        raise DomainError(f'{USER_ID_HEADER} must be at most {MAX_USER_ID_LENGTH} characters')
    return user_id


async def get_current_user_id(
    x_user_id: Optional[str] = Header(default=None, alias=USER_ID_HEADER),
) -> str:
    user_id = _normalize(x_user_id)
    if user_id is None:
        raise AuthenticationError(f'{USER_ID_HEADER} header is required')
    return user_id


async def get_optional_user_id(
    x_user_id: Optional[str] = Header(default=None, alias=USER_ID_HEADER),
) -> Optional[str]:
    return _normalize(x_user_id)
