"""Engine data types."""

from dataclasses import dataclass, field

SHORT_HASH_LENGTH = 7

# Login shown when a commit has neither a linked author nor committer
UNKNOWN_LOGIN = '-'


@dataclass(frozen=True)
class CommitRecord:
    """One commit of the comparison range, as delivered by the fetch layer."""
    subject: str
    hash: str
    author_login: str = UNKNOWN_LOGIN
    author_name: str | None = None

    @property
    def short_hash(self) -> str:
        return self.hash[:SHORT_HASH_LENGTH]


@dataclass(frozen=True)
class ClassifiedCommit:
    """Type prefix parsed out of a commit subject."""
    type: str | None
    scope: str | None
    rest: str


@dataclass(frozen=True)
class ChangelogEntry:
    """A formatted line plus the type it was classified under."""
    type: str | None
    line: str


@dataclass(frozen=True)
class ChangelogResult:
    """Flattened lines and the fully rendered changelog."""
    lines: tuple[str, ...] = field(default_factory=tuple)
    content: str = ""
