"""
GitHub API integration for release lookups and file downloads.
Handles token authentication, the pre-flight access check and interactive asset selection.
"""

from pathlib import Path
from typing import List, Optional

import requests
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from .exceptions import (
    ApiUnreachable,
    AssetSelectionFailed,
    AuthOrApiError,
    DownloadFailed,
    InvalidSelection,
)
from .models import MultipleAssets, ReleaseInfo, RepositoryReference, filename_from_url

console = Console()
error_console = Console(stderr=True)

RAW_ACCEPT = 'application/vnd.github.v3.raw'


def choose_asset(urls: List[str], choice: str) -> str:
    """
    Map a 1-based menu answer onto the list of asset URLs.

    Args:
        urls: Asset URLs in the order they were listed
        choice: Raw text typed by the user

    Returns:
        The URL at position ``choice``
    """
    choice = choice.strip()
    if not choice.isdecimal() or not 1 <= int(choice) <= len(urls):
        raise InvalidSelection(f"Invalid choice: {choice!r} (expected 1-{len(urls)})")

    selected = urls[int(choice) - 1]
    if not selected:
        raise AssetSelectionFailed("Failed to select asset.")
    return selected


class GitHubAPI:
    """GitHub API client used for release lookups and downloads."""

    WEB_URL = "https://github.com/"
    CHUNK_SIZE = 8192

    def __init__(self, token: Optional[str] = None, verbose: bool = False,
                 timeout: Optional[float] = None):
        self.verbose = verbose
        self.timeout = timeout
        self.session = requests.Session()

        if token:
            self.session.headers.update({'Authorization': f'token {token}'})
            if verbose:
                console.print("[green]🔑 Using GitHub token for API requests[/green]")
        else:
            if verbose:
                console.print("[yellow]⚠️  No GitHub token - using unauthenticated requests[/yellow]")

    @property
    def has_token(self) -> bool:
        return 'Authorization' in self.session.headers

    def clear_token(self):
        """Drop the token from the session so no later request can carry it."""
        self.session.headers.pop('Authorization', None)
        if self.verbose:
            console.print("[blue]🧹 GitHub token cleared from memory[/blue]")

    def check_repository_access(self, reference: RepositoryReference) -> bool:
        """
        Pre-flight check that the token can see the repository.

        The result is advisory: failures are reported but callers carry on.

        Returns:
            True when the API answered 200
        """
        console.print(f"[blue]ℹ️  Checking token access for {reference.full_name}...[/blue]")

        try:
            response = self.session.get(reference.api_url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            error_console.print(f"[red]❌ Access check failed: {str(e)}[/red]")
            return False

        status = response.status_code
        if status == 200:
            console.print("[green]✅ Repo accessible (HTTP 200)[/green]")
            return True
        if status == 404:
            error_console.print("[red]⚠️  Repo not found or no access (HTTP 404)[/red]")
        elif status in (401, 403):
            error_console.print(f"[red]❌ Authentication failed (HTTP {status})[/red]")
        else:
            error_console.print(f"[red]🛑 Unexpected status {status} (URL: {reference.api_url})[/red]")
        return False

    def get_latest_release(self, reference: RepositoryReference) -> ReleaseInfo:
        """
        Fetch the latest release of a repository.

        The HTTP status is not inspected here: GitHub reports errors through a
        ``message`` field in the body, which the caller interprets.
        """
        url = reference.latest_release_url
        if self.verbose:
            console.print(f"[blue]🌐 GET {url}[/blue]")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise ApiUnreachable(f"Error fetching API ({url})", str(e)) from e

        try:
            data = response.json()
        except ValueError as e:
            raise AuthOrApiError(
                f"Unreadable API response (HTTP {response.status_code})",
                "Check token scope/permissions."
            ) from e

        if not isinstance(data, dict):
            raise AuthOrApiError(f"Unexpected API response (HTTP {response.status_code})")

        return ReleaseInfo.from_api_response(data)

    def is_github_reachable(self) -> bool:
        """Probe github.com with a HEAD request."""
        try:
            self.session.head(self.WEB_URL, timeout=self.timeout)
            return True
        except requests.exceptions.RequestException:
            return False

    def download_file(self, url: str, accept: Optional[str] = None,
                      dest_dir: Optional[Path] = None) -> Path:
        """
        Stream ``url`` into ``dest_dir`` (the working directory by default).

        Args:
            url: File or asset URL
            accept: Optional Accept header, e.g. for raw content
            dest_dir: Target directory

        Returns:
            Path of the written file
        """
        filename = filename_from_url(url)
        if not filename:
            raise DownloadFailed(f"Could not derive a filename from {url}")

        target = Path(dest_dir or Path.cwd()) / filename
        partial = target.with_name(target.name + '.part')
        headers = {'Accept': accept} if accept else {}

        if self.verbose:
            console.print(f"[blue]🌐 GET {url} -> {target}[/blue]")

        # An existing file at target is only replaced once the transfer completes
        try:
            with self.session.get(url, headers=headers, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                written = 0
                with open(partial, 'wb') as f:
                    for chunk in response.iter_content(chunk_size=self.CHUNK_SIZE):
                        f.write(chunk)
                        written += len(chunk)
            partial.replace(target)
        except requests.exceptions.RequestException as e:
            partial.unlink(missing_ok=True)
            raise DownloadFailed("Download failed", str(e)) from e
        except OSError as e:
            partial.unlink(missing_ok=True)
            raise DownloadFailed(f"Could not write {target}", str(e)) from e

        if self.verbose:
            console.print(f"[blue]📦 Wrote {written:,} bytes[/blue]")
        return target

    def select_asset_interactive(self, outcome: MultipleAssets) -> str:
        """
        Present the release assets for user selection.

        Args:
            outcome: Lookup result listing more than one asset

        Returns:
            Download URL of the selected asset
        """
        table = Table(title=f"Multiple assets found (tag: {outcome.tag or 'N/A'})")
        table.add_column("#", style="cyan", width=3)
        table.add_column("Asset", style="green")
        table.add_column("URL", style="white")

        for i, url in enumerate(outcome.urls, 1):
            table.add_row(str(i), filename_from_url(url), url)

        console.print(table)

        choice = Prompt.ask(f"Select asset number (1-{outcome.count}) to download")
        return choose_asset(outcome.urls, choice)
