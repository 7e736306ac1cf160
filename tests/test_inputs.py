"""
Tests for URL/token input sources.
"""

import os
from unittest.mock import patch

import pytest

from gh_download_asset.inputs import (
    CliInputSource,
    PromptInputSource,
    QuitRequested,
    StaticInputSource,
)


def test_prompt_source_reads_url_and_token():
    source = PromptInputSource()

    with patch("gh_download_asset.inputs.Prompt.ask", side_effect=["  https://github.com/o/r  ", "ghp_abc"]) as mock_ask:
        assert source.read_url() == "https://github.com/o/r"
        assert source.read_token() == "ghp_abc"

    assert mock_ask.call_args.kwargs["password"] is True


def test_prompt_source_empty_token_is_none():
    with patch("gh_download_asset.inputs.Prompt.ask", return_value=""):
        assert PromptInputSource().read_token() is None


def test_prompt_source_quit_marker():
    with patch("gh_download_asset.inputs.Prompt.ask", return_value="-q"):
        with pytest.raises(QuitRequested):
            PromptInputSource().read_token()


def test_static_source():
    source = StaticInputSource("https://github.com/o/r ", token="")

    assert source.read_url() == "https://github.com/o/r"
    assert source.read_token() is None

    with pytest.raises(QuitRequested):
        StaticInputSource("https://github.com/o/r", token="-q").read_token()


def test_cli_source_uses_argument_before_prompt():
    source = CliInputSource(url="https://github.com/o/r")

    with patch("gh_download_asset.inputs.Prompt.ask") as mock_ask:
        assert source.read_url() == "https://github.com/o/r"

    mock_ask.assert_not_called()


def test_cli_source_prompts_for_missing_url():
    with patch("gh_download_asset.inputs.Prompt.ask", return_value="https://github.com/a/b"):
        assert CliInputSource().read_url() == "https://github.com/a/b"


def test_cli_source_env_token():
    source = CliInputSource(url="https://github.com/o/r", env_token=True)

    with patch.dict(os.environ, {"GITHUB_TOKEN": "env_token_value"}):
        with patch("gh_download_asset.inputs.Prompt.ask") as mock_ask:
            assert source.read_token() == "env_token_value"

    mock_ask.assert_not_called()


def test_cli_source_env_token_missing():
    source = CliInputSource(env_token=True)

    with patch.dict(os.environ, {}, clear=True):
        assert source.read_token() is None
