"""Domain value objects for Project FPV.

Value objects are immutable and defined by their values, not identity.
"""

import math
from enum import Enum

from fpv.domain.value.common import ValueObject

# Average reading speed used for read-time estimates
WORDS_PER_MINUTE = 200

EXCERPT_MAX_LENGTH = 150

# Column widths of users.name and users.email
NAME_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255


class Category(str, Enum):
    """Fixed set of post categories."""

    FREESTYLE = "Freestyle"
    RACING = "Racing"
    CINEMATIC = "Cinematic"
    BUILDS = "Builds"
    REVIEWS = "Reviews"
    TIPS = "Tips"


class PostStatus(str, Enum):
    """Publication status of a post."""

    PUBLISHED = "published"
    DRAFT = "draft"


class AuthProvider(str, Enum):
    """Sign-in providers reported by Firebase.

    Only used for defaults; unknown provider tags are stored as-is.
    """

    FIREBASE = "firebase"
    GOOGLE = "google.com"
    PASSWORD = "password"


class FieldError(ValueObject):
    """A single input violation."""

    field: str
    message: str


class VerifiedIdentity(ValueObject):
    """Identity claims taken from an already verified ID token.

    The core trusts these values as authentic; verification happens at the
    boundary before this object is built.
    """

    external_id: str  # Firebase UID
    email: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None
    provider: str = AuthProvider.FIREBASE.value


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def estimate_read_time(content: str) -> int:
    """Estimate minutes needed to read `content` (never less than 1)."""
    return max(1, math.ceil(count_words(content) / WORDS_PER_MINUTE))
