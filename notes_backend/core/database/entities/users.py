"""
User entity models.

This module contains the database entity for user accounts. A user row holds
the login credentials, the verification state and the single pending token
used for both e-mail verification and password reset.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlalchemy import Enum as SAEnum
from sqlmodel import Field

from notes_backend.core.models.domain import UserRole

from ..base import Base, utc_now_naive


class User(Base, table=True):
    """Entity for user accounts.

    ``password`` stores the argon2 PHC string, never the plaintext.
    ``verification_token`` and ``token_expires_at`` are set together and
    cleared together.

    Table: users
    """

    __tablename__ = "users"

    # Primary identifiers
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=100)
    email: str = Field(max_length=255, unique=True, index=True)

    # Credentials and verification
    verified: bool = Field(default=False)
    password: str = Field(max_length=255)
    verification_token: Optional[str] = Field(default=None, max_length=255, index=True)
    token_expires_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=False))

    role: UserRole = Field(
        default=UserRole.user,
        sa_column=Column(
            SAEnum(UserRole, name="user_role", values_callable=lambda enum: [member.value for member in enum]),
            nullable=False,
            default=UserRole.user,
        ),
    )

    # Timestamps (naive UTC)
    created_at: datetime = Field(default_factory=utc_now_naive, sa_type=DateTime(timezone=False))
    updated_at: datetime = Field(
        default_factory=utc_now_naive,
        sa_type=DateTime(timezone=False),
        sa_column_kwargs={"onupdate": utc_now_naive},
    )

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, role={self.role.value})"
