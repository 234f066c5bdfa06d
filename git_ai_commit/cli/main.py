"""CLI Main Entry Point"""

from dataclasses import replace

from dotenv import find_dotenv, load_dotenv

from git_ai_commit.commit import CommitGenerator, ResponseParser
from git_ai_commit.config import Config, github_token, load_config
from git_ai_commit.git import DiffCollector, GitError, GitRepository
from git_ai_commit.github import GitHubClient
from git_ai_commit.llm import ModelError, get_client
from git_ai_commit.logging import configure_logging
from git_ai_commit.output import (
    ARROW, CHECK, Spinner, dim, info, print_error, print_success, print_warning, render_record, success,
)
from git_ai_commit.prompts import PromptBuilder, PromptConfig
from git_ai_commit.publish import NO_CHANGES, PublishResult, PublishState, Publisher

from git_ai_commit.cli.args import parse_args
from git_ai_commit.cli.commands import display_config, run_install_completion

FAILURE_MESSAGES = {
    "generation": "Could not generate a commit message. Nothing was committed.",
    "commit": "Commit failed",
    "push": "Committed locally, but push failed",
}


def _apply_overrides(args, config: Config) -> Config:
    """Precedence: CLI args > environment variables > config file.

    Works on a copy so the cached file config stays as loaded.
    """
    config = replace(config).apply_env()
    if args.provider:
        config.provider = args.provider
    if args.model:
        config.model = args.model
    if args.base:
        config.base_branch = args.base
    if args.remote:
        config.remote = args.remote
    return config


def _report(result: PublishResult, remote: str) -> int:
    if result.state is PublishState.FAILED:
        failure = result.failure
        headline = FAILURE_MESSAGES.get(failure.stage, "Publish failed")
        if failure.stage == "generation":
            print_error(headline, failure.message)
        else:
            print_error(f"{headline}: {failure.message}")
        return 1

    print()
    for line in render_record(result.record.title, result.record.body):
        print(line)
    print(f"{success(CHECK)} Committed and pushed to {info(remote)}")

    outcome = result.outcome
    if outcome is not None:
        if outcome.action == NO_CHANGES:
            print(f"{dim(ARROW)} {outcome.message}")
            print(f"  {info(outcome.url)}")
        else:
            print_success(f"{outcome.message}: {info(outcome.url)}")

    if result.warning is not None:
        print_warning(f"Pull request step skipped ({result.warning.stage}): {result.warning.message}")

    return 0


def _commit_flow(args, config: Config) -> int:
    repository = GitRepository()
    try:
        repository.status()
    except GitError as e:
        print_error(str(e))
        return 1

    try:
        client = get_client(provider=config.provider, model=config.model)
    except ModelError as e:
        print_error(str(e))
        return 1

    builder = PromptBuilder(PromptConfig(hint=args.hint, max_subject_length=config.max_subject_length))
    parser = ResponseParser(max_subject_length=config.max_subject_length)
    generator = CommitGenerator(DiffCollector(repository), client, builder, parser)

    github = None
    if args.pr and github_token():
        github = GitHubClient(github_token())

    publisher = Publisher(
        repository,
        generator,
        github,
        base_branch=config.base_branch,
        remote=config.remote,
    )

    action = "Committing changes and updating pull request" if args.pr else "Committing changes"
    try:
        with Spinner(f"{action} using {client.name}..."):
            result = publisher.publish(create_pr=args.pr)
    except GitError as e:
        print_error(str(e))
        return 1
    finally:
        if github is not None:
            github.close()

    return _report(result, config.remote)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    load_dotenv(find_dotenv(usecwd=True))
    args = parse_args(argv)
    configure_logging(verbose=getattr(args, 'verbose', False))

    if args.command == 'config':
        if args.install_completion:
            return run_install_completion()
        return display_config()

    config = _apply_overrides(args, load_config())
    return _commit_flow(args, config)
