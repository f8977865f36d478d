"""
Changelog Generator

Builds a grouped, emoji-annotated changelog from the commits between two refs.
"""

__version__ = "1.0.0"

# Centralized commit types - single source of truth
# Used by: engine.registry (defaults), cli.commands (--show-config)
DEFAULT_TYPES = {
    'feat': '🌟',
    'fix': '🐞',
    'perf': '📈',
    'refactor': '🐝',
    'revert': '🔙',
    'style': '🎨',
    'doc': '📖',
    'docs': '📖',
    'test': '⛑',
    'build': '🧯',
    'ci': '💢',
    'chore': '💄',
    'clean': '💊',
    'website': '🌍',
    'type': '🆎',
}

# Bucket for commits without a recognised type prefix
OTHER_TYPE = '__unknown__'

SECTION_TITLES = {
    'feat': 'Features',
    'fix': 'Bug Fixes',
    'perf': 'Performance',
    'refactor': 'Refactoring',
    'revert': 'Reverts',
    'style': 'Styles',
    'doc': 'Documentation',
    'docs': 'Documentation',
    'test': 'Tests',
    'build': 'Build System',
    'ci': 'Continuous Integration',
    'chore': 'Chores',
    'clean': 'Cleanup',
    'website': 'Website',
    'type': 'Types',
    OTHER_TYPE: 'Other',
}
