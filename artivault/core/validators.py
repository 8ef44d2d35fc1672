"""Input validators — pure, total predicates over untrusted caller input.

Every predicate returns ``False`` for inputs of the wrong type instead of
raising.  ``ValidationPolicy`` layers optional, stricter checks on top of
the baseline predicates; it can tighten validation but never skip it.
"""

from __future__ import annotations

import string
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict

from artivault.core.errors import (
    ContentValidationFailed,
    InvalidInput,
    MetadataStructureInvalid,
    PermissionLevelMismatch,
    TemporalBoundaryExceeded,
)
from artivault.models.permissions import MAX_GRANT_DURATION, AccessTier

LABEL_MAX = 50
HASH_LENGTH = 64
CONTENT_MAX = 200
CATEGORY_MAX = 20
TAGS_MAX = 5
TAG_MAX = 30

_HEX_DIGITS = frozenset(string.hexdigits)


def _text_within(value: Any, upper: int) -> bool:
    return isinstance(value, str) and 1 <= len(value) <= upper


def validate_label(value: Any) -> bool:
    return _text_within(value, LABEL_MAX)


def validate_hash(value: Any) -> bool:
    """Fixed-width digest text: exactly 64 characters."""
    return isinstance(value, str) and len(value) == HASH_LENGTH


def validate_content(value: Any) -> bool:
    return _text_within(value, CONTENT_MAX)


def validate_category(value: Any) -> bool:
    return _text_within(value, CATEGORY_MAX)


def validate_tags(items: Any) -> bool:
    """1-5 tags, each 1-30 characters.  A bare string is not a tag list."""
    if isinstance(items, (str, bytes)) or not isinstance(items, Sequence):
        return False
    if not 1 <= len(items) <= TAGS_MAX:
        return False
    return all(_text_within(tag, TAG_MAX) for tag in items)


def validate_tier(value: Any) -> bool:
    if isinstance(value, AccessTier):
        return True
    return isinstance(value, str) and value in {t.value for t in AccessTier}


def validate_duration(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 < value <= MAX_GRANT_DURATION


def validate_grantee(caller: Any, target: Any) -> bool:
    """No self-grants."""
    return target != caller


# ---------------------------------------------------------------------------
# Policy: baseline predicates plus configured strictness
# ---------------------------------------------------------------------------


class ValidationPolicy(BaseModel):
    """Explicit validation strictness.

    Parameters
    ----------
    require_hex_hash:
        Also require the 64-character integrity hash to be hexadecimal.
    reject_blank_text:
        Also reject label, content, category and tags that are whitespace-only.
    """

    model_config = ConfigDict(frozen=True)

    require_hex_hash: bool = False
    reject_blank_text: bool = False

    def _blank(self, value: str) -> bool:
        return self.reject_blank_text and not value.strip()

    # Each check raises the error kind bound to that field.

    def check_label(self, label: Any) -> None:
        if not validate_label(label) or self._blank(label):
            raise InvalidInput(f"label must be 1-{LABEL_MAX} characters")

    def check_hash(self, integrity_hash: Any) -> None:
        if not validate_hash(integrity_hash):
            raise InvalidInput(f"integrity hash must be exactly {HASH_LENGTH} characters")
        if self.require_hex_hash and not set(integrity_hash) <= _HEX_DIGITS:
            raise InvalidInput("integrity hash must be hexadecimal")

    def check_content(self, content: Any) -> None:
        if not validate_content(content) or self._blank(content):
            raise ContentValidationFailed(f"content must be 1-{CONTENT_MAX} characters")

    def check_category(self, category: Any) -> None:
        if not validate_category(category) or self._blank(category):
            raise MetadataStructureInvalid(f"category must be 1-{CATEGORY_MAX} characters")

    def check_tags(self, tags: Any) -> None:
        if not validate_tags(tags) or any(self._blank(t) for t in tags):
            raise MetadataStructureInvalid(
                f"tags must hold 1-{TAGS_MAX} items of 1-{TAG_MAX} characters"
            )

    def check_grantee(self, caller: str, grantee: Any) -> None:
        if not validate_grantee(caller, grantee):
            raise InvalidInput("an owner cannot grant access to themselves")
        if not isinstance(grantee, str) or not grantee:
            raise InvalidInput("grantee must be a non-empty principal")

    def check_tier(self, tier: Any) -> AccessTier:
        if not validate_tier(tier):
            raise PermissionLevelMismatch(
                f"tier must be one of {', '.join(t.value for t in AccessTier)}"
            )
        return AccessTier(tier)

    def check_duration(self, duration: Any) -> None:
        if not validate_duration(duration):
            raise TemporalBoundaryExceeded(
                f"duration must be within 1-{MAX_GRANT_DURATION} height units"
            )
