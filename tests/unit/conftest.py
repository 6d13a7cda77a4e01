"""Pytest configuration and fixtures for eaws unit tests."""

import io
import os
import sys
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import yaml
from rich.console import Console

repo_root = Path(__file__).parent.parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from eaws.console import StatusConsole  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path) -> Generator[None, None, None]:
    """Keep user configuration and the ambient AWS profile out of unit tests.

    Yields
    ------
    None
        Control back to test with EAWS_CONFIG pointing at an empty location
        and AWS_PROFILE unset
    """
    saved = {key: os.environ.get(key) for key in ("EAWS_CONFIG", "AWS_PROFILE")}
    os.environ["EAWS_CONFIG"] = str(tmp_path / "missing-eaws.yaml")
    os.environ.pop("AWS_PROFILE", None)

    yield

    for key, value in saved.items():
        if value is not None:
            os.environ[key] = value
        else:
            os.environ.pop(key, None)


@pytest.fixture
def aws_credentials() -> Generator[None, None, None]:
    """Fixture to set AWS credentials for testing with proper cleanup.

    Sets mock AWS credentials in environment variables for the duration of the test,
    then restores the original environment state.

    Yields
    ------
    None
        Control back to test after setting credentials
    """
    keys = {
        "AWS_ACCESS_KEY_ID": "testing",
        "AWS_SECRET_ACCESS_KEY": "testing",
        "AWS_SECURITY_TOKEN": "testing",
        "AWS_SESSION_TOKEN": "testing",
        "AWS_DEFAULT_REGION": "us-east-1",
    }
    saved = {key: os.environ.get(key) for key in keys}
    os.environ.update(keys)

    yield

    for key, value in saved.items():
        if value is not None:
            os.environ[key] = value
        else:
            os.environ.pop(key, None)


@pytest.fixture
def console() -> StatusConsole:
    """StatusConsole recording output instead of writing to the terminal.

    Returns
    -------
    StatusConsole
        Console whose output can be read with ``export_text()``
    """

    def _recording() -> Console:
        return Console(
            file=io.StringIO(),
            record=True,
            no_color=True,
            width=200,
            highlight=False,
        )

    return StatusConsole(verbose=False, console=_recording(), error_console=_recording())


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Point EAWS_CONFIG at a file inside the temporary directory.

    Parameters
    ----------
    tmp_path : Path
        Pytest temporary directory path

    Returns
    -------
    Path
        Path to the (not yet written) config file
    """
    config_path = tmp_path / "eaws.yaml"
    os.environ["EAWS_CONFIG"] = str(config_path)
    return config_path


@pytest.fixture
def write_config(config_file: Path):
    """Helper fixture to write config data to file.

    Parameters
    ----------
    config_file : Path
        Path to config file from config_file fixture

    Returns
    -------
    callable
        Function that takes config_data dict and writes to file
    """

    def _write(config_data: dict[str, Any]) -> None:
        with open(config_file, "w") as f:
            yaml.dump(config_data, f)

    return _write
