"""
Exceptions raised while resolving and downloading GitHub files.

Every error is terminal for the current run. The CLI maps each class to its
``exit_code`` and prints the message on stderr.
"""

from typing import Optional


class GhDownloadError(Exception):
    """Base exception for all gh-download-asset errors."""

    exit_code = 1

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class UnsupportedHost(GhDownloadError):
    """The URL does not point at github.com or raw.githubusercontent.com."""

    exit_code = 8


class UnparseableURL(GhDownloadError):
    """No owner/repo could be extracted from the URL."""

    exit_code = 6


class ApiUnreachable(GhDownloadError):
    """GitHub could not be reached at all."""

    exit_code = 1


class RepositoryNotFound(GhDownloadError):
    """The API answered "Not Found" (missing repository, release or access)."""

    exit_code = 2


class AuthOrApiError(GhDownloadError):
    """The API returned an error other than "Not Found"."""

    exit_code = 2


class NoAssetsFound(GhDownloadError):
    """The latest release has no downloadable assets."""

    exit_code = 3


class InvalidSelection(GhDownloadError):
    """The asset number entered by the user is not in range."""

    exit_code = 4


class AssetSelectionFailed(GhDownloadError):
    """A valid number was entered but no asset URL sits at that position."""

    exit_code = 5


class DownloadFailed(GhDownloadError):
    """The file transfer itself failed."""

    exit_code = 7
