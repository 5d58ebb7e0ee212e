"""User aggregate root.

Users are created the first time a verified Firebase identity syncs and are
refreshed on every later sign-in. They are never deleted.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from fpv.domain.model.common import DomainModel, utcnow
from fpv.domain.value import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    AuthProvider,
    UserId,
)


class User(DomainModel):
    """User aggregate root.

    Both external_id and email are globally unique.
    """

    id: UserId
    external_id: str = Field(min_length=1, max_length=128)  # Firebase UID
    email: str = Field(min_length=1, max_length=EMAIL_MAX_LENGTH)
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    image: Optional[str] = None  # Avatar URL
    provider: str = AuthProvider.FIREBASE.value
    created_at: datetime = Field(default_factory=utcnow)
    last_login_at: datetime = Field(default_factory=utcnow)
