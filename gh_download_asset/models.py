"""
Shared data models for the gh-download-asset tool.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def filename_from_url(url: str) -> str:
    """Return the last path segment of a URL, without any query string."""
    path = url.split('?', 1)[0].rstrip('/')
    return path.rsplit('/', 1)[-1]


@dataclass(frozen=True)
class RepositoryReference:
    """Owner and name of a GitHub repository."""
    owner: str
    name: str

    @property
    def full_name(self) -> str:
        """Return the full repository name in owner/repo format."""
        return f"{self.owner}/{self.name}"

    @property
    def api_url(self) -> str:
        return f"https://api.github.com/repos/{self.owner}/{self.name}"

    @property
    def latest_release_url(self) -> str:
        return f"{self.api_url}/releases/latest"


@dataclass(frozen=True)
class ReleaseAsset:
    """A file attached to a release."""
    download_url: str

    @property
    def filename(self) -> str:
        return filename_from_url(self.download_url)


@dataclass
class ReleaseInfo:
    """The parts of a "latest release" API response the downloader cares about."""
    tag: Optional[str] = None
    assets: List[ReleaseAsset] = field(default_factory=list)
    message: Optional[str] = None

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> 'ReleaseInfo':
        """
        Build a ReleaseInfo from a decoded API response body.

        Assets keep the order in which they appear in the response. Entries
        without a string ``browser_download_url`` are skipped.
        """
        message = data.get('message')
        tag = data.get('tag_name')

        assets = []
        for item in data.get('assets') or []:
            if not isinstance(item, dict):
                continue
            url = item.get('browser_download_url')
            if isinstance(url, str):
                assets.append(ReleaseAsset(download_url=url))

        return cls(
            tag=tag if isinstance(tag, str) else None,
            assets=assets,
            message=str(message) if message is not None else None
        )


# Routes produced by URL classification

@dataclass(frozen=True)
class RawFile:
    url: str

    @property
    def filename(self) -> str:
        return filename_from_url(self.url)


@dataclass(frozen=True)
class ReleaseAssetDirect:
    url: str

    @property
    def filename(self) -> str:
        return filename_from_url(self.url)


@dataclass(frozen=True)
class RepositoryLatestRelease:
    reference: RepositoryReference


# Outcomes of a latest-release lookup

@dataclass(frozen=True)
class SingleAsset:
    url: str
    tag: Optional[str] = None

    @property
    def filename(self) -> str:
        return filename_from_url(self.url)


@dataclass(frozen=True)
class NoAssets:
    tag: Optional[str] = None


@dataclass(frozen=True)
class MultipleAssets:
    urls: List[str]
    tag: Optional[str] = None

    @property
    def count(self) -> int:
        return len(self.urls)
