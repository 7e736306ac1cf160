"""
URL classification and release resolution.
Turns a GitHub URL into a download route and, for repository links, into the latest release's assets.
"""

import re
from typing import Union

from rich.console import Console

from .exceptions import AuthOrApiError, RepositoryNotFound, UnparseableURL, UnsupportedHost
from .github_api import GitHubAPI
from .models import (
    MultipleAssets,
    NoAssets,
    RawFile,
    ReleaseAssetDirect,
    RepositoryLatestRelease,
    RepositoryReference,
    SingleAsset,
    filename_from_url,
)

console = Console()

Route = Union[RawFile, ReleaseAssetDirect, RepositoryLatestRelease]
DownloadOutcome = Union[SingleAsset, NoAssets, MultipleAssets]


class RepoURLResolver:
    """Classifies GitHub URLs and resolves repository links to release assets."""

    SCHEME_PATTERN = re.compile(r'^https?://', re.IGNORECASE)
    WWW_PATTERN = re.compile(r'^www\.', re.IGNORECASE)
    GITHUB_HOSTS = ('github.com', 'raw.githubusercontent.com')
    HOST_PATTERN = re.compile(r'^(raw\.githubusercontent\.com|github\.com)/')

    # github.com/<owner>/<repo>/releases/download/...
    RELEASE_DOWNLOAD_PATTERN = re.compile(r'^github\.com/[^/]+/[^/]+/releases/download/')

    # Two leading path segments, the second ending at a slash or end of string
    OWNER_REPO_PATTERN = re.compile(r'^([^/]+)/([^/]+)(?:$|/)')

    def __init__(self, github_api: GitHubAPI, verbose: bool = False):
        self.github_api = github_api
        self.verbose = verbose

    @classmethod
    def normalize(cls, url: str) -> str:
        """Strip whitespace, the http(s) scheme and a leading www; lower-case a GitHub host."""
        cleaned = cls.SCHEME_PATTERN.sub('', url.strip())
        cleaned = cls.WWW_PATTERN.sub('', cleaned)
        host, sep, path = cleaned.partition('/')
        if host.lower() in cls.GITHUB_HOSTS:
            host = host.lower()
        return host + sep + path

    def classify(self, url: str) -> Route:
        """
        Decide how a URL is downloaded.

        Checks run in order and the first match wins:
        raw.githubusercontent.com, then release download links, then any
        other owner/repo path (resolved through the latest release).
        """
        cleaned = self.normalize(url)

        host_match = self.HOST_PATTERN.match(cleaned)
        if not host_match:
            raise UnsupportedHost("Only GitHub URLs are allowed.", url)

        https_url = f"https://{cleaned}"

        if host_match.group(1) == 'raw.githubusercontent.com':
            if self.verbose:
                console.print("[green]✅ Detected raw file URL[/green]")
            return RawFile(url=https_url)

        if self.RELEASE_DOWNLOAD_PATTERN.match(cleaned):
            if self.verbose:
                console.print("[green]✅ Detected release asset URL[/green]")
            return ReleaseAssetDirect(url=https_url)

        reference = self.parse_repository(url)
        if self.verbose:
            console.print(f"[green]✅ Detected repository {reference.full_name}[/green]")
        return RepositoryLatestRelease(reference=reference)

    @classmethod
    def parse_repository(cls, url: str) -> RepositoryReference:
        """
        Extract owner and repository name from a GitHub or raw-content URL.

        This is a syntactic check only; the repository may not exist.
        """
        path = cls.normalize(url)
        for prefix in ('raw.githubusercontent.com/', 'github.com/'):
            if path.startswith(prefix):
                path = path[len(prefix):]
                break
        path = path.rstrip('/')

        match = cls.OWNER_REPO_PATTERN.match(path)
        if not match:
            raise UnparseableURL("Could not extract user/repo from URL", url)

        owner, name = match.groups()
        return RepositoryReference(owner=owner, name=name)

    @staticmethod
    def asset_filename(route_or_url: Union[RawFile, ReleaseAssetDirect, str]) -> str:
        """Filename a raw file or release asset is saved under."""
        url = route_or_url if isinstance(route_or_url, str) else route_or_url.url
        return filename_from_url(url)

    def resolve_latest_release(self, reference: RepositoryReference) -> DownloadOutcome:
        """
        Look up the latest release and report which assets it offers.

        Selection among several assets is left to the caller.
        """
        console.print(f"[blue]ℹ️  Fetching latest release for {reference.full_name} ...[/blue]")

        release = self.github_api.get_latest_release(reference)

        if release.message is not None:
            if release.message == 'Not Found':
                raise RepositoryNotFound(
                    "Repo not found or no access (API message: Not Found)."
                )
            raise AuthOrApiError(
                "Authentication or API error. Check token scope/permissions.",
                release.message
            )

        urls = [asset.download_url for asset in release.assets]

        if not urls:
            return NoAssets(tag=release.tag)
        if len(urls) == 1:
            return SingleAsset(url=urls[0], tag=release.tag)
        return MultipleAssets(urls=urls, tag=release.tag)
