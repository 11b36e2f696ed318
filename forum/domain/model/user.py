"""User aggregate root.

Users accumulate reputation as others vote on what they wrote.
"""

from datetime import datetime

from pydantic import Field

from forum.domain.model.common import DomainModel
from forum.domain.value import Handle, UserId


class User(DomainModel):
    """User aggregate root.

    Reputation never drops below zero regardless of cumulative downvotes.
    """

    id: UserId
    handle: Handle
    reputation: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
