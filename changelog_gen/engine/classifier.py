"""Commit Classifier - detect the conventional commit type of a subject line."""

import re

from changelog_gen.engine.models import ClassifiedCommit
from changelog_gen.engine.registry import TypeRegistry


def first_line(message: str) -> str:
    """Subject of a full commit message: first paragraph, first line."""
    if not message:
        return ""
    return message.split('\n\n', 1)[0].split('\n', 1)[0].strip()


def _prefix_pattern(keyword: str) -> re.Pattern:
    return re.compile(rf'^{re.escape(keyword)}(?:\((?P<scope>[^)]*)\))?!?: ')


def classify(subject: str, registry: TypeRegistry) -> ClassifiedCommit:
    """Classify a subject by the longest registry keyword it starts with.

    A keyword matches ``keyword[(scope)][!]: `` at the very start of the
    subject. Without a match the commit is untyped and ``rest`` is the
    subject unchanged.
    """
    if not subject:
        return ClassifiedCommit(type=None, scope=None, rest=subject or "")

    best = None
    for keyword in registry:
        if best is not None and len(keyword) <= len(best[0]):
            continue
        if not subject.startswith(keyword):
            continue
        match = _prefix_pattern(keyword).match(subject)
        if match:
            best = (keyword, match)

    if best is None:
        return ClassifiedCommit(type=None, scope=None, rest=subject)

    keyword, match = best
    return ClassifiedCommit(
        type=keyword,
        scope=match.group('scope'),
        rest=subject[match.end():],
    )
