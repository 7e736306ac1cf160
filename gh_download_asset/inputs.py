"""
Where the URL and the token come from.

The CLI reads both through an ``InputSource`` so that the resolver never
prompts on its own and tests can inject fixed values.
"""

import os
from typing import Optional

from rich.console import Console
from rich.prompt import Prompt

console = Console()

QUIT_TOKEN = '-q'


class QuitRequested(Exception):
    """The user typed the quit marker at the token prompt."""


class InputSource:
    """Supplies the GitHub URL and an optional access token."""

    def read_url(self) -> str:
        raise NotImplementedError

    def read_token(self) -> Optional[str]:
        """Return the token, or None when the user skipped it."""
        raise NotImplementedError


class PromptInputSource(InputSource):
    """Interactive terminal prompts; the token is read without echo."""

    def read_url(self) -> str:
        return Prompt.ask("Enter GitHub file/repo URL").strip()

    def read_token(self) -> Optional[str]:
        token = Prompt.ask(
            "Enter GitHub Token (or press Enter to skip, '-q' to quit)",
            password=True,
            default='',
            show_default=False
        ).strip()
        if token == QUIT_TOKEN:
            raise QuitRequested()
        return token or None


class StaticInputSource(InputSource):
    """Fixed values, e.g. taken from command-line arguments."""

    def __init__(self, url: str, token: Optional[str] = None):
        self.url = url
        self.token = token

    def read_url(self) -> str:
        return self.url.strip()

    def read_token(self) -> Optional[str]:
        if self.token == QUIT_TOKEN:
            raise QuitRequested()
        return self.token or None


class CliInputSource(PromptInputSource):
    """
    Command-line values first, prompts for whatever is missing.

    Args:
        url: URL given as an argument, if any
        env_token: Take the token from GITHUB_TOKEN instead of prompting
    """

    def __init__(self, url: Optional[str] = None, env_token: bool = False):
        self.url = url
        self.env_token = env_token

    def read_url(self) -> str:
        if self.url:
            return self.url.strip()
        return super().read_url()

    def read_token(self) -> Optional[str]:
        if self.env_token:
            token = os.getenv('GITHUB_TOKEN', '').strip()
            if not token:
                console.print("[yellow]⚠️  GITHUB_TOKEN is not set - continuing without a token[/yellow]")
            return token or None
        return super().read_token()
