"""Type Registry - ordered commit type keyword to emoji mapping."""

import logging
import re
from collections.abc import Iterable, Iterator, Mapping

from changelog_gen import DEFAULT_TYPES

logger = logging.getLogger(__name__)

# Emoji code point table (revision 1). Kept explicit instead of relying on a
# Unicode "is emoji" property so detection is identical everywhere.
EMOJI_RANGES: list[tuple[int, int]] = [
    (0x1F100, 0x1F1FF),  # Enclosed Alphanumeric Supplement, incl. regional indicators
    (0x1F300, 0x1F5FF),  # Misc Symbols and Pictographs
    (0x1F600, 0x1F64F),  # Emoticons
    (0x1F680, 0x1F6FF),  # Transport and Map Symbols
    (0x1F900, 0x1F9FF),  # Supplemental Symbols and Pictographs
    (0x1FA70, 0x1FAFF),  # Symbols and Pictographs Extended-A
    (0x2600, 0x26FF),    # Misc Symbols
    (0x2700, 0x27BF),    # Dingbats
]

REGIONAL_INDICATORS = (0x1F1E6, 0x1F1FF)

KEYWORD_RE = re.compile(r'^[A-Za-z0-9_-]+$')

# Template placeholders that name caller variables, not commit types
TEMPLATE_VARIABLES = ('tag', 'version', 'base', 'head', 'branch', 'compareurl', 'repository')
RESERVED_KEYWORDS = frozenset(TEMPLATE_VARIABLES) | {'changelog'}


def _char_class(ranges: list[tuple[int, int]]) -> str:
    return ''.join(f'{chr(lo)}-{chr(hi)}' for lo, hi in ranges)


_FLAG = f'[{_char_class([REGIONAL_INDICATORS])}]{{2}}'
EMOJI_RE = re.compile(f'(?:{_FLAG}|[{_char_class(EMOJI_RANGES)}])\ufe0f?')


def is_emoji(char: str) -> bool:
    """True if the single character falls inside EMOJI_RANGES."""
    code = ord(char)
    return any(lo <= code <= hi for lo, hi in EMOJI_RANGES)


def parse_emoji_token(token: str) -> tuple[str, str] | None:
    """Split ``"chore💄"`` into ``("chore", "💄")``.

    The keyword is the leading run of non-emoji characters, the icon is the
    first emoji found anywhere in the token. Returns None when either part
    is missing, the keyword is not a valid type identifier, or the keyword
    is reserved for a template placeholder (RESERVED_KEYWORDS).
    """
    token = token.strip()
    match = EMOJI_RE.search(token)
    if not match:
        return None

    keyword = token
    for i, char in enumerate(token):
        if is_emoji(char):
            keyword = token[:i]
            break
    keyword = keyword.strip()

    if not keyword or not KEYWORD_RE.match(keyword) or keyword in RESERVED_KEYWORDS:
        return None
    return keyword, match.group(0)


def parse_custom_emoji(entries: str | Iterable[str] | None) -> list[tuple[str, str]]:
    """Parse ``"type🆎,chore💄,fix🐞"`` into ordered (keyword, emoji) pairs.

    Malformed tokens are dropped without error.
    """
    if not entries:
        return []
    tokens = entries.split(',') if isinstance(entries, str) else list(entries)

    pairs = []
    for token in tokens:
        parsed = parse_emoji_token(token)
        if parsed is None:
            if token.strip():
                logger.debug("Ignoring custom emoji token %r", token)
            continue
        pairs.append(parsed)
    return pairs


class TypeRegistry(Mapping):
    """Immutable, insertion-ordered mapping of commit type keyword to emoji."""

    def __init__(self, entries: Mapping[str, str] | Iterable[tuple[str, str]] = ()):
        self._types: dict[str, str] = dict(entries)

    def __getitem__(self, keyword: str) -> str:
        return self._types[keyword]

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        return f"TypeRegistry({self._types!r})"

    @property
    def keywords(self) -> list[str]:
        return list(self._types)

    def with_overrides(self, overrides: Iterable[tuple[str, str]]) -> 'TypeRegistry':
        """Return a new registry; existing keys keep their position, new keys are appended."""
        merged = dict(self._types)
        for keyword, emoji in overrides:
            merged[keyword] = emoji
        return TypeRegistry(merged)

    def position(self, keyword: str) -> int:
        """Declared order of a keyword; unknown keywords sort last."""
        try:
            return self.keywords.index(keyword)
        except ValueError:
            return len(self._types)


def build_registry(custom_entries: str | Iterable[str] | None = None,
                   defaults: Mapping[str, str] | None = None) -> TypeRegistry:
    """Build a fresh registry from the defaults overlaid with custom tokens."""
    base = TypeRegistry(DEFAULT_TYPES if defaults is None else defaults)
    return base.with_overrides(parse_custom_emoji(custom_entries))
