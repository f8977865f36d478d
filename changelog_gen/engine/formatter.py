"""Subject Formatter - turn one classified commit into a changelog line."""

import logging

from changelog_gen.engine.base import RenderConfig
from changelog_gen.engine.models import UNKNOWN_LOGIN, ChangelogEntry, ClassifiedCommit, CommitRecord

logger = logging.getLogger(__name__)

BULLET = '- '


def format_login(login: str, cfg: RenderConfig) -> str:
    """``@login``, hyperlinked to the profile page unless plain markdown was requested."""
    if cfg.original_markdown or not login or login == UNKNOWN_LOGIN:
        return f"@{login or UNKNOWN_LOGIN}"
    return f"[@{login}]({cfg.server_url.rstrip('/')}/{login})"


def format_commit(commit: CommitRecord, classified: ClassifiedCommit,
                  cfg: RenderConfig) -> ChangelogEntry | None:
    """Build the display line for a commit, or None if it is filtered out.

    Line layout: ``- [<emoji> ]<text> (<short_hash>) @<login>``
    """
    if cfg.filter_author and cfg.filter_author != commit.author_login:
        logger.debug("Skipping %s: author %s filtered", commit.short_hash, commit.author_login)
        return None

    text = classified.rest if cfg.remove_type else commit.subject

    if cfg.content_filter is not None:
        text = cfg.content_filter.apply(text)
        if text is None:
            logger.debug("Skipping %s: rejected by content filter", commit.short_hash)
            return None

    if cfg.show_emoji and classified.type in cfg.registry:
        text = f"{cfg.registry[classified.type]} {text}"

    line = f"{BULLET}{text} ({commit.short_hash}) {format_login(commit.author_login, cfg)}"
    return ChangelogEntry(type=classified.type, line=line)
