"""Shared test fixtures for hooktemplates tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from hooktemplates.config import TemplatesConfig
from hooktemplates.hooks import HookBus
from hooktemplates.templating import Template

DATA_DIR = Path(__file__).parent / "_data"
PLUGIN_VIEWS_DIR = DATA_DIR / "plugin-views" / "templates"

HOOK_PREFIX = "bork"

EngineFactory = Callable[..., Template]


class DummyPluginOrigin:
    """A component object exposing a plugin path and a template namespace."""

    template_namespace: str = "dummy"

    def __init__(self, plugin_path: Path = PLUGIN_VIEWS_DIR) -> None:
        self.plugin_path: Path = plugin_path


@pytest.fixture
def console() -> Console:
    return Console(force_terminal=False, width=200)


@pytest.fixture
def templates_config() -> TemplatesConfig:
    return TemplatesConfig(hook_prefix=HOOK_PREFIX, root_path=PLUGIN_VIEWS_DIR)


@pytest.fixture
def bus() -> HookBus:
    return HookBus()


@pytest.fixture
def make_engine(templates_config: TemplatesConfig, bus: HookBus) -> EngineFactory:
    """Return a factory creating engines that share the test bus.

    Keyword arguments are passed to ``Template``; ``config`` may be given to
    replace the default test configuration.
    """

    def _make(**kwargs: object) -> Template:
        config = kwargs.pop("config", templates_config)
        assert isinstance(config, TemplatesConfig)
        return Template(config, bus=bus, **kwargs)  # pyright: ignore[reportArgumentType]

    return _make


@pytest.fixture
def dummy_engine(make_engine: EngineFactory) -> Template:
    """Engine rendering the bundled templates under the ``dummy`` namespace."""
    return make_engine(origin=DummyPluginOrigin())


def write_template(root: Path, name: str, source: str) -> Path:
    """Write a template source file below ``root``.

    Args:
        root: Folder the template name is relative to.
        name: Slash separated template name without extension.
        source: Python source of the template.

    Returns:
        Path to the created file.
    """
    path = root.joinpath(*name.split("/")).with_suffix(".py")
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(source)
    return path
