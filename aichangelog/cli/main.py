"""CLI Main Entry Point"""

import functools
import os
import sys

from aichangelog.changelog import ChangelogFile, ReleaseTrigger
from aichangelog.composer import ComposeResult, ComposeStatus, ReleaseNoteComposer
from aichangelog.config import Config, load_config
from aichangelog.git import GitAnalyzer, GitError
from aichangelog.llm import get_client
from aichangelog.output import (
    RULE, Spinner, bold, colorize_markdown, dim, print_error, print_hint, print_success, print_warning,
)
from aichangelog.prompts import PromptConfig

from aichangelog.cli.args import parse_args
from aichangelog.cli.commands import display_config, run_setup, run_install_completion

EXIT_OK = 0
EXIT_FAILED = 1


def _handle_subcommands(args):
    """Handle subcommands that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(), True
    if args.display_config:
        return display_config(), True
    if args.setup:
        return run_setup(), True
    return EXIT_OK, False


def _get_provider_settings(args, config):
    """Resolve provider, model and timeout from args, env, or config.

    Precedence: CLI args > environment variables > config file
    """
    provider = args.provider or os.environ.get('AICHANGELOG_PROVIDER') or config.provider
    model = args.model or os.environ.get('AICHANGELOG_MODEL') or config.model

    timeout = args.timeout
    env_timeout = os.environ.get('AICHANGELOG_TIMEOUT')
    if timeout is None and env_timeout:
        if env_timeout.isdigit() and int(env_timeout) > 0:
            timeout = int(env_timeout)
        else:
            print_warning(f"Ignoring invalid AICHANGELOG_TIMEOUT '{env_timeout}'")
    if timeout is None:
        timeout = config.timeout

    return provider, model, timeout


def _apply_overrides(args, config: Config) -> None:
    if args.output:
        config.changelog_path = args.output
    if args.trigger_env:
        config.trigger_env = args.trigger_env


def _resolve_trigger(args, config: Config) -> ReleaseTrigger:
    """--bump wins; otherwise read the lifecycle event (release:major, ...)."""
    if args.bump:
        return ReleaseTrigger.from_signal(args.bump)
    return ReleaseTrigger.from_signal(os.environ.get(config.trigger_env))


def _display_entry(entry):
    """Display a changelog entry between horizontal rules."""
    width = max((len(line) for line in entry.split('\n')), default=40)
    width = min(width, 100)
    print(f"\n{dim(RULE * width)}")
    print(colorize_markdown(entry))
    print(dim(RULE * width))


def _print_verbose_stats(result: ComposeResult):
    """Print verbose timing and token statistics."""
    print()
    if result.changes:
        changes = result.changes
        print(dim(f"  Changes: {changes.total_files} files (+{changes.total_additions} -{changes.total_deletions}) since {changes.tag}"))
    if result.prompt:
        print(dim(f"  Prompt: ~{len(result.prompt)//4} tokens ({len(result.prompt)} chars)"))
    if result.response:
        print(dim(f"  Response: {result.response.tokens_used} tokens"))
    timings = result.timings
    print(dim(f"  Timings: git={timings.get('git', 0):.2f}s, generate={timings.get('generate', 0):.2f}s"))


def report_result(result: ComposeResult, config: Config, verbose: bool = False) -> int:
    """Print the outcome of a run and map it to an exit code."""
    is_pipe = not sys.stdout.isatty()

    if result.status is ComposeStatus.FAILED:
        print_error(f"Error generating changelog: {result.error.message}")
        if result.error.hint:
            print_hint(result.error.hint)
        return EXIT_FAILED

    if result.status is ComposeStatus.NO_CHANGES:
        print(dim(f"No changes since {result.last_tag}; {config.changelog_path} left unchanged."))
        return EXIT_OK

    if result.status is ComposeStatus.DRY_RUN and is_pipe:
        print(result.entry)
        return EXIT_OK

    if result.status is ComposeStatus.DRY_RUN:
        _display_entry(result.entry)
        print(dim(f"Dry run: {config.changelog_path} not modified."))
    else:
        print_success(f"Changelog generated for {bold(result.version.to_tag())} using {result.provider}")

    if verbose and not is_pipe:
        _print_verbose_stats(result)

    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)

    # Handle subcommands that exit early
    exit_code, should_exit = _handle_subcommands(args)
    if should_exit:
        return exit_code

    # Load config, apply CLI overrides, resolve provider/model
    config = load_config()
    _apply_overrides(args, config)
    provider, model, timeout = _get_provider_settings(args, config)

    try:
        git = GitAnalyzer()
    except GitError as e:
        print_error(str(e))
        return EXIT_FAILED

    composer = ReleaseNoteComposer(
        git,
        functools.partial(get_client, provider=provider, model=model, timeout=timeout),
        ChangelogFile(config.changelog_path),
    )

    with Spinner("Generating changelog"):
        result = composer.compose(
            _resolve_trigger(args, config),
            prompt_config=PromptConfig(hint=args.hint),
            dry_run=args.dry_run,
        )

    return report_result(result, config, verbose=args.verbose)
