"""CLI Main Entry Point"""

import logging
import os
from dataclasses import replace

from dotenv import load_dotenv

from changelog_gen.config import Config, load_config
from changelog_gen.engine import (
    InvalidConfigError,
    RenderConfig,
    compare_url,
    extract_branch,
    extract_version,
    generate_changelog,
    is_tag_ref,
    same_release,
    validate_ref,
)
from changelog_gen.engine.models import SHORT_HASH_LENGTH
from changelog_gen.engine.refs import strip_ref_prefix
from changelog_gen.github import GitHubClient, GitHubError
from changelog_gen.github.client import API_BASE
from changelog_gen.output import OutputWriter, dim, group, print_error, print_warning, ref

from changelog_gen.cli.args import parse_args
from changelog_gen.cli.commands import display_config, run_install_completion

logger = logging.getLogger(__name__)

# CLI flag -> Config field
_ARG_FIELDS = (
    'order', 'custom_emoji', 'show_emoji', 'remove_type', 'original_markdown',
    'filter_author', 'filter', 'gh_pages',
)


def _handle_subcommands(args):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(), True
    if args.display_config:
        return display_config(), True
    return 0, False


def _resolve_config(args, base: Config) -> Config:
    """Apply environment and CLI overrides on top of the file config.

    Precedence: CLI args > environment variables > config file
    """
    config = replace(base).apply_env()
    for name in _ARG_FIELDS:
        value = getattr(args, name, None)
        if value is not None:
            setattr(config, name, value)

    if args.template_file:
        with open(args.template_file, 'r', encoding='utf-8') as f:
            config.template = f.read()
    elif args.template is not None:
        # Allow literal "\n" on the command line
        config.template = args.template.replace('\\n', '\n')
    return config


def _report_gh_pages(client: GitHubClient, branch: str, writer: OutputWriter) -> None:
    """Emit the gh-pages head hash. Failures are logged, never fatal."""
    try:
        sha = client.branch_sha(branch)
    except GitHubError as e:
        print_warning(f"Get Branch: {e}")
        return
    if sha:
        logger.info("%s head: %s", branch, sha)
        writer.set('gh-pages-hash', sha)
        writer.set('gh-pages-short-hash', sha[:SHORT_HASH_LENGTH])


def run(args, config: Config, render_config: RenderConfig,
        client: GitHubClient, writer: OutputWriter) -> int:
    """Resolve refs, fetch commits, render and emit results."""
    repository = client.repository
    base_ref = args.base_ref or client.latest_release_tag()
    head_ref = args.head_ref or os.environ.get('GITHUB_SHA', '')
    trigger_ref = args.ref or os.environ.get('GITHUB_REF', '')

    logger.info("Commit Content: %s", repository)

    tag = strip_ref_prefix(trigger_ref) if is_tag_ref(trigger_ref) else ''
    branch = extract_branch(trigger_ref)
    if branch:
        writer.set('branch', branch)
        logger.info("Branch: %s", branch)
    logger.info("Ref: base_ref(%s), head_ref(%s), tag(%s)", base_ref, head_ref, tag)

    _report_gh_pages(client, config.gh_pages, writer)

    if same_release(base_ref, head_ref):
        writer.set('tag', base_ref)
        writer.set('version', extract_version(base_ref))
        logger.info("Done: base_ref(%s) === head_ref(%s)", base_ref, head_ref)
        return 0

    validate_ref(head_ref, 'head ref')
    validate_ref(base_ref, 'base ref')

    if args.path:
        commits = client.path_commits(args.path)
    else:
        commits = client.compare_commits(base_ref, head_ref)

    for commit in commits:
        logger.debug("Commit: %s %s(%s) %s", commit.subject, commit.author_name, commit.author_login, commit.hash)

    if not tag:
        tag = client.latest_tag()

    url = compare_url(config.server_url, repository, base_ref, tag or head_ref)
    variables = {
        'tag': tag,
        'version': extract_version(tag or head_ref),
        'base': base_ref,
        'head': head_ref,
        'branch': branch or '',
        'compareurl': url,
        'repository': repository,
    }
    result = generate_changelog(commits, render_config, variables)

    with group(f"Result Changelog {ref(base_ref)}...{ref(tag or head_ref)}"):
        logger.info("%s", result.content or dim("(no commits)"))

    writer.set('changelog', result.content)
    writer.set('tag', tag)
    writer.set('compareurl', url)
    writer.set('version', variables['version'])
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    load_dotenv()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Handle subcommands that exit early
    exit_code, should_exit = _handle_subcommands(args)
    if should_exit:
        return exit_code

    try:
        config = _resolve_config(args, load_config())
        render_config = config.to_render_config()
    except (InvalidConfigError, OSError) as e:
        print_error(f"Invalid configuration: {e}")
        return 1

    repository = args.repo or os.environ.get('GITHUB_REPOSITORY', '')
    token = args.token or os.environ.get('GITHUB_TOKEN')
    api_url = args.api_url or os.environ.get('GITHUB_API_URL') or API_BASE
    writer = OutputWriter.from_env(args.output)

    try:
        client = GitHubClient(repository, token=token, api_base=api_url)
        return run(args, config, render_config, client, writer)
    except (GitHubError, InvalidConfigError) as e:
        print_error(f"Could not generate changelog between references because: {e}")
        return 1
