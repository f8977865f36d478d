"""Changelog Engine Package"""

import logging
from collections.abc import Iterable, Mapping

from changelog_gen.engine.assembler import assemble, group_entries, order_commits, render_template
from changelog_gen.engine.base import ContentFilter, InvalidConfigError, RenderConfig, ORDER_ASC, ORDER_DESC, VALID_ORDERS
from changelog_gen.engine.classifier import classify, first_line
from changelog_gen.engine.formatter import format_commit
from changelog_gen.engine.models import (
    ChangelogEntry,
    ChangelogResult,
    ClassifiedCommit,
    CommitRecord,
    UNKNOWN_LOGIN,
)
from changelog_gen.engine.refs import (
    compare_url,
    extract_branch,
    extract_version,
    is_tag_ref,
    same_release,
    validate_ref,
)
from changelog_gen.engine.registry import TypeRegistry, build_registry, parse_custom_emoji

logger = logging.getLogger(__name__)


def generate_changelog(commits: Iterable[CommitRecord], cfg: RenderConfig,
                       variables: Mapping[str, object] | None = None) -> ChangelogResult:
    """Main entry point: chronological commits -> rendered changelog."""
    entries = []
    ordered = order_commits(commits, cfg.order)
    for commit in ordered:
        classified = classify(commit.subject, cfg.registry)
        entry = format_commit(commit, classified, cfg)
        if entry is not None:
            entries.append(entry)

    logger.info("Formatted %d of %d commit(s)", len(entries), len(ordered))
    return assemble(entries, cfg, variables)


__all__ = [
    "ChangelogEntry",
    "ChangelogResult",
    "ClassifiedCommit",
    "CommitRecord",
    "ContentFilter",
    "InvalidConfigError",
    "ORDER_ASC",
    "ORDER_DESC",
    "RenderConfig",
    "TypeRegistry",
    "VALID_ORDERS",
    "UNKNOWN_LOGIN",
    "assemble",
    "build_registry",
    "classify",
    "compare_url",
    "extract_branch",
    "extract_version",
    "first_line",
    "format_commit",
    "generate_changelog",
    "group_entries",
    "is_tag_ref",
    "order_commits",
    "parse_custom_emoji",
    "render_template",
    "same_release",
    "validate_ref",
]
