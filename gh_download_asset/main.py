#!/usr/bin/env python3
"""
Main CLI entry point for the gh-download-asset tool.
"""

import sys
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel

from .exceptions import ApiUnreachable, GhDownloadError, NoAssetsFound, UnparseableURL
from .github_api import RAW_ACCEPT, GitHubAPI
from .inputs import CliInputSource, InputSource, QuitRequested
from .models import MultipleAssets, NoAssets, RawFile, ReleaseAssetDirect, SingleAsset
from .repository import RepoURLResolver

# Load environment variables from .env file
load_dotenv()

console = Console()
error_console = Console(stderr=True)


def pre_flight_check(github_api: GitHubAPI, url: str) -> bool:
    """
    Advisory token check against the repository endpoint.

    Without a token the check is skipped and counts as passed. A failed
    check is reported but never stops the download.
    """
    if not github_api.has_token:
        console.print("[blue]ℹ️  GITHUB_TOKEN not provided. Skipping API access check.[/blue]")
        return True

    try:
        reference = RepoURLResolver.parse_repository(url)
    except UnparseableURL:
        return False

    return github_api.check_repository_access(reference)


def download_from_url(url: str, resolver: RepoURLResolver, github_api: GitHubAPI,
                      dest_dir: Optional[Path] = None) -> Path:
    """Classify ``url``, resolve it to a single file and download that file."""
    try:
        route = resolver.classify(url)
    except UnparseableURL:
        if not github_api.is_github_reachable():
            raise ApiUnreachable("Cannot reach GitHub. Check internet or proxy settings.")
        raise

    if isinstance(route, RawFile):
        console.print(f"[blue]ℹ️  Downloading raw file: {route.url} as {route.filename}[/blue]")
        return github_api.download_file(route.url, accept=RAW_ACCEPT, dest_dir=dest_dir)

    if isinstance(route, ReleaseAssetDirect):
        console.print(f"[blue]ℹ️  Downloading release asset: {route.url}[/blue]")
        return github_api.download_file(route.url, dest_dir=dest_dir)

    outcome = resolver.resolve_latest_release(route.reference)

    if isinstance(outcome, NoAssets):
        raise NoAssetsFound(f"No release assets found for tag: {outcome.tag or 'N/A'}")

    if isinstance(outcome, SingleAsset):
        console.print(f"[blue]ℹ️  Detected release tag: {outcome.tag or 'N/A'}[/blue]")
        console.print(f"[blue]ℹ️  Downloading single release asset: {outcome.url}[/blue]")
        return github_api.download_file(outcome.url, dest_dir=dest_dir)

    if not isinstance(outcome, MultipleAssets):
        raise TypeError(f"Unexpected release outcome: {outcome!r}")

    console.print(f"[magenta]🔢 Multiple assets found (tag: {outcome.tag or 'N/A'}):[/magenta]")
    selected = github_api.select_asset_interactive(outcome)
    console.print(f"[blue]ℹ️  Downloading: {selected}[/blue]")
    return github_api.download_file(selected, dest_dir=dest_dir)


def run(source: InputSource, verbose: bool = False, timeout: Optional[float] = None,
        dest_dir: Optional[Path] = None) -> Optional[Path]:
    """
    One complete run: read inputs, check access, download.

    Returns:
        Path of the downloaded file, or None when the user quit at the token prompt
    """
    url = source.read_url()

    try:
        token = source.read_token()
    except QuitRequested:
        console.print("[blue]ℹ️  Quitting as requested.[/blue]")
        return None

    github_api = GitHubAPI(token=token, verbose=verbose, timeout=timeout)
    resolver = RepoURLResolver(github_api, verbose=verbose)

    try:
        pre_flight_check(github_api, url)
        path = download_from_url(url, resolver, github_api, dest_dir=dest_dir)
    finally:
        github_api.clear_token()
        token = None

    console.print(f"[green]✅ Successfully downloaded {path.name}[/green]")
    console.print("[green]✅ Done[/green]")
    return path


@click.command(context_settings={'help_option_names': ['-h', '--help']})
@click.argument('url', required=False)
@click.option('--env-token', is_flag=True, help='Read the token from GITHUB_TOKEN instead of prompting')
@click.option('--timeout', default=None, type=float, help='HTTP timeout in seconds (default: none)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.version_option(package_name='gh-download-asset')
def cli(url, env_token, timeout, verbose):
    """
    Download files and release assets from GitHub.

    URL: raw file, release asset or repository URL (prompted for when omitted)

    Run without arguments to enter interactive mode. A repository URL
    downloads an asset of its latest release.

    Examples:
      gh-download-asset https://github.com/cli/cli
      gh-download-asset https://raw.githubusercontent.com/owner/repo/main/install.sh
      gh-download-asset --env-token https://github.com/owner/private-repo
    """
    source = CliInputSource(url=url, env_token=env_token)

    try:
        run(source, verbose=verbose, timeout=timeout)

    except GhDownloadError as e:
        error_console.print(Panel(
            f"[red]{str(e)}[/red]",
            title=type(e).__name__,
            border_style="red"
        ))
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        console.print("\n[yellow]❌ Operation cancelled by user[/yellow]")
        sys.exit(0)
    except Exception as e:
        error_console.print(Panel(
            f"[red]Unexpected error:[/red] {str(e)}",
            title="Error",
            border_style="red"
        ))
        if verbose:
            error_console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    cli()
