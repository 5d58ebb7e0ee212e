"""Strongly typed identifiers for domain entities.

NewType keeps user and post IDs from being mixed up.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
