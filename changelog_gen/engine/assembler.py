"""Changelog Assembler - group formatted lines by type and render the template.

Template syntax::

    ## {{version}}            header variable, supplied by the caller
    ### Bugs
    {{fix}}                   lines of one type
    ### Misc
    {{chore,style,ci}}        lines of several types, in the listed order
    ### Other
    {{__unknown__||Nothing}}  untyped commits, with fallback text
    {{changelog}}             every line, ungrouped

A type marker that ends up empty (and has no fallback) is removed. A literal
heading is removed too when nothing at all rendered in its section.
"""

import re
from collections.abc import Iterable, Mapping, Sequence

from changelog_gen import OTHER_TYPE, SECTION_TITLES
from changelog_gen.engine.base import ORDER_ASC, RenderConfig
from changelog_gen.engine.models import ChangelogEntry, ChangelogResult

PLACEHOLDER_RE = re.compile(r'\{\{\s*(?P<names>[^{}|]*?)\s*(?:\|\|(?P<fallback>[^{}]*))?\}\}')
HEADING_RE = re.compile(r'^\s{0,3}#{1,6}\s')
ALL_LINES = 'changelog'


def order_commits(commits: Sequence, order: str) -> list:
    """Input is oldest first; 'asc' keeps it, anything else yields newest first."""
    commits = list(commits)
    return commits if order == ORDER_ASC else commits[::-1]


def section_title(keyword: str) -> str:
    return SECTION_TITLES.get(keyword) or keyword.replace('_', ' ').strip().capitalize()


def group_entries(entries: Iterable[ChangelogEntry], cfg: RenderConfig) -> dict[str, list[str]]:
    """Bucket lines by type in registry order, untyped lines last.

    Relative order inside a bucket follows the input sequence.
    """
    buckets: dict[str, list[str]] = {}
    for entry in entries:
        buckets.setdefault(entry.type or OTHER_TYPE, []).append(entry.line)

    def sort_key(keyword):
        if keyword == OTHER_TYPE:
            return len(cfg.registry) + 1
        return cfg.registry.position(keyword)

    ordered_keys = sorted(buckets, key=sort_key)  # stable: unregistered types keep first appearance
    return {key: buckets[key] for key in ordered_keys}


def _render_default(sections: Mapping[str, list[str]]) -> str:
    blocks = []
    for keyword, lines in sections.items():
        blocks.append('\n'.join([f"### {section_title(keyword)}", *lines]))
    return '\n\n'.join(blocks)


def _close_block(output: list[str], heading: int | None, had_empty: bool, has_content: bool) -> None:
    """Drop the literal heading at ``heading`` when its whole section rendered nothing.

    Only literal template lines count as section headings; a heading built
    from a variable such as ``## {{version}}`` is kept.
    """
    if heading is not None and had_empty and not has_content:
        del output[heading:]


def render_template(template: str, sections: Mapping[str, list[str]],
                    all_lines: Sequence[str], variables: Mapping[str, object] | None = None) -> str:
    variables = variables or {}
    output: list[str] = []
    # Current section: index of its literal heading, whether a marker in it
    # came out empty, and whether anything non-blank was rendered under it
    heading, had_empty, has_content = None, False, False

    for raw_line in template.splitlines():
        had_marker = False
        all_empty = True

        def substitute(match: re.Match) -> str:
            nonlocal had_marker, all_empty
            names = match.group('names')
            fallback = match.group('fallback')

            if names in variables:
                value = variables[names]
                return '' if value is None else str(value)

            had_marker = True
            if names == ALL_LINES:
                lines = list(all_lines)
            else:
                lines = []
                for keyword in (n.strip() for n in names.split(',')):
                    lines.extend(sections.get(keyword, []))

            if lines:
                all_empty = False
                return '\n'.join(lines)
            if fallback is not None:
                all_empty = False
                return fallback.strip()
            return ''

        rendered = PLACEHOLDER_RE.sub(substitute, raw_line)
        if had_marker and all_empty and not rendered.strip():
            had_empty = True
            continue

        if not had_marker and HEADING_RE.match(rendered):
            _close_block(output, heading, had_empty, has_content)
            heading = len(output) if rendered == raw_line else None
            had_empty, has_content = False, False
        elif rendered.strip():
            has_content = True
        output.extend(rendered.split('\n'))

    _close_block(output, heading, had_empty, has_content)
    content = '\n'.join(line.rstrip() for line in output)
    return re.sub(r'\n{3,}', '\n\n', content).strip()


def assemble(entries: Sequence[ChangelogEntry], cfg: RenderConfig,
             variables: Mapping[str, object] | None = None) -> ChangelogResult:
    """Render the ordered entries into a ChangelogResult.

    ``cfg.order`` is expected to be applied already (see order_commits); it
    only affects order within a section, sections follow the registry.
    """
    entries = list(entries)
    lines = tuple(entry.line for entry in entries)
    sections = group_entries(entries, cfg)

    if cfg.template.strip():
        content = render_template(cfg.template, sections, lines, variables)
    else:
        content = _render_default(sections)

    return ChangelogResult(lines=lines, content=content)
