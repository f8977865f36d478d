"""Engine Base Classes and Shared Code"""

import re
from dataclasses import dataclass, field

from changelog_gen.engine.registry import TypeRegistry, build_registry

ORDER_ASC = 'asc'
ORDER_DESC = 'desc'
VALID_ORDERS = {ORDER_ASC, ORDER_DESC}

DEFAULT_SERVER_URL = 'https://github.com'

# s/<pattern>/<replacement>/<flags>, delimited by / # or |
_REWRITE_RE = re.compile(r'^s(?P<delim>[/#|])(?P<body>.*)(?P=delim)(?P<flags>[a-z]*)$', re.DOTALL)


class InvalidConfigError(ValueError):
    """Raised when run configuration cannot produce a trustworthy changelog."""
    pass


def _split_rewrite(body: str, delim: str) -> tuple[str, str]:
    """Split ``pattern<delim>replacement`` honouring backslash-escaped delimiters."""
    escaped = False
    for i, char in enumerate(body):
        if escaped:
            escaped = False
        elif char == '\\':
            escaped = True
        elif char == delim:
            pattern = body[:i].replace(f'\\{delim}', delim)
            return pattern, body[i + 1:]
    raise InvalidConfigError(f"Rewrite filter needs s{delim}pattern{delim}replacement{delim}")


@dataclass(frozen=True)
class ContentFilter:
    """Commit text filter.

    A plain pattern keeps only commits whose text matches it. A sed-style
    ``s/pattern/replacement/`` expression rewrites the text instead.
    """
    pattern: re.Pattern
    replacement: str | None = None

    @property
    def is_rewrite(self) -> bool:
        return self.replacement is not None

    @classmethod
    def parse(cls, expression: str) -> 'ContentFilter | None':
        if not expression:
            return None

        replacement = None
        pattern_text = expression
        flags = 0
        rewrite = _REWRITE_RE.match(expression)
        if rewrite:
            pattern_text, replacement = _split_rewrite(rewrite.group('body'), rewrite.group('delim'))
            for flag in rewrite.group('flags'):
                if flag != 'i':
                    raise InvalidConfigError(f"Unsupported rewrite flag '{flag}' in filter: {expression}")
                flags |= re.IGNORECASE

        try:
            compiled = re.compile(pattern_text, flags)
        except re.error as e:
            raise InvalidConfigError(f"Invalid filter pattern {pattern_text!r}: {e}") from e

        content_filter = cls(pattern=compiled, replacement=replacement)
        if content_filter.is_rewrite:
            # Surface bad group references now rather than on the first matching commit
            content_filter.apply("")
        return content_filter

    def apply(self, text: str) -> str | None:
        """Return the (possibly rewritten) text, or None when the commit is filtered out."""
        if self.is_rewrite:
            try:
                rewritten = self.pattern.sub(self.replacement, text)
            except (re.error, IndexError) as e:
                raise InvalidConfigError(f"Invalid filter replacement {self.replacement!r}: {e}") from e
            return rewritten.strip() or None
        return text if self.pattern.search(text) else None


@dataclass(frozen=True)
class RenderConfig:
    """Read-only settings for a single changelog run."""
    registry: TypeRegistry = field(default_factory=build_registry)
    order: str = ORDER_DESC
    show_emoji: bool = True
    remove_type: bool = True
    filter_author: str = ""
    content_filter: ContentFilter | None = None
    original_markdown: bool = False
    template: str = ""
    server_url: str = DEFAULT_SERVER_URL

    def __post_init__(self):
        if self.order not in VALID_ORDERS:
            raise InvalidConfigError(f"Invalid order '{self.order}', use 'asc' or 'desc'")

    @classmethod
    def build(cls, *, custom_emoji: str = "", filter: str = "", **options) -> 'RenderConfig':
        """Build from raw option values, parsing emoji overrides and the filter."""
        return cls(
            registry=build_registry(custom_emoji),
            content_filter=ContentFilter.parse(filter),
            **options,
        )
