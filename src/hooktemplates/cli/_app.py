"""The command-line interface for hooktemplates."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from hooktemplates.config import TemplatesConfig
from hooktemplates.exceptions import ConfigLoadError, ConfigurationError
from hooktemplates.utils import create_cli_logger

from ._commands import register_commands
from ._context import CLIContext
from ._shared import ExitCode, exit_with_error

APP_HELP = "Resolve and render hookable templates."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="hooktemplates",
        help=APP_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable debug logging")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        prefix: Annotated[
            str | None,
            Parameter(name="--prefix", help="Hook prefix overriding the config"),
        ] = None,
    ) -> None:
        """Launch hooktemplates with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable debug logging.
            config: Explicit path to config file.
            prefix: Hook prefix overriding the configured one.
        """
        if config is not None and not config.is_file():
            exit_with_error(
                f"Config file not found: {config}",
                ExitCode.LOAD_ERROR,
                console=error_console,
            )

        overrides: dict[str, object] = {}
        if prefix is not None:
            overrides["hook_prefix"] = prefix
        if verbose:
            overrides["logging"] = {"level": "debug"}

        try:
            loaded_config = TemplatesConfig.load(config, overrides=overrides)
        except ConfigLoadError as e:
            exit_with_error(str(e), ExitCode.LOAD_ERROR, console=error_console)
        except ConfigurationError as e:
            exit_with_error(str(e), ExitCode.VALIDATION_ERROR, console=error_console)

        cli_logger = create_cli_logger(
            level=loaded_config.logging.level.value,
            log_format="json" if loaded_config.logging.format.value == "json" else "text",
            log_file=loaded_config.logging.file,
            command=tokens[0] if tokens else "",
        )

        ctx = CLIContext(
            config=loaded_config,
            verbose=verbose,
            config_path=config,
            logger=cli_logger,
            console=console,
            error_console=error_console,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `hooktemplates` CLI."""
    create_app().meta()


if __name__ == "__main__":
    main()
