"""Version and ref helpers."""

import re

from changelog_gen.engine.base import InvalidConfigError

TAG_PREFIX = 'refs/tags/'
BRANCH_PREFIX = 'refs/heads/'
KNOWN_PREFIXES = (TAG_PREFIX, BRANCH_PREFIX)

REF_NAME_RE = re.compile(r'^[.A-Za-z0-9_-]+$')
_VERSION_PREFIX_RE = re.compile(r'^[vV](?=\d)')


def strip_ref_prefix(ref: str) -> str:
    for prefix in KNOWN_PREFIXES:
        if ref.startswith(prefix):
            return ref[len(prefix):]
    return ref


def extract_version(ref: str) -> str:
    """``refs/tags/v1.2.3`` -> ``1.2.3``; anything unrecognised is returned as-is."""
    if not ref:
        return ""
    return _VERSION_PREFIX_RE.sub('', strip_ref_prefix(ref), count=1)


def extract_branch(ref: str) -> str | None:
    """Branch name of a ``refs/heads/*`` ref, None for any other ref."""
    if ref and ref.startswith(BRANCH_PREFIX):
        return ref[len(BRANCH_PREFIX):]
    return None


def is_tag_ref(ref: str) -> bool:
    return bool(ref) and ref.startswith(TAG_PREFIX)


def validate_ref(ref: str, label: str = 'ref') -> str:
    """Reject refs that cannot be safely placed into a compare request."""
    if not ref or not REF_NAME_RE.match(ref):
        raise InvalidConfigError(
            f"Invalid {label} {ref!r}: branch names must contain only numbers, "
            "strings, underscores, periods, and dashes."
        )
    return ref


def same_release(base_ref: str, head_ref: str) -> bool:
    """True when base and head point at the same release (``v1.0.0`` vs ``1.0.0``)."""
    if not base_ref or not head_ref:
        return False
    return re.sub(r'^[vV]', '', base_ref) == head_ref


def compare_url(server_url: str, repository: str, base_ref: str, head_ref: str) -> str:
    return f"{server_url.rstrip('/')}/{repository}/compare/{base_ref}...{head_ref}"
