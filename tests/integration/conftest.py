import os
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from hooktemplates.cli import create_app
from tests.conftest import HOOK_PREFIX


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("HOOKTEMPLATES_"):
            monkeypatch.delenv(key)


@pytest.fixture
def config_file(tmp_path: Path, clean_env: None) -> Path:
    path = tmp_path / "hooktemplates.toml"
    _ = path.write_text(f'hook_prefix = "{HOOK_PREFIX}"\n')
    return path


@pytest.fixture
def hooktemplates_cli_with_exit_code(console: Console) -> Callable[..., int]:
    """Create CLI app for testing that returns the exit code.

    Arguments are passed through the global options handler, so ``--config``
    and ``--prefix`` may precede the command name.
    """
    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        try:
            app.meta(list(args))
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
