# pyright: reportUnusedCallResult=false
# ruff: noqa: TC002, TC003, FBT002  # Path and App needed at runtime for cyclopts
"""Commands for rendering and inspecting templates from the shell."""

from pathlib import Path
from typing import Annotated, Never

from cyclopts import App, Parameter
from rich.table import Table

from hooktemplates.config import parse_string_value
from hooktemplates.exceptions import ConfigurationError
from hooktemplates.templating import CandidateFolder, Template
from hooktemplates.utils import dump_json, load_json, set_nested

from ._context import CLIContext, OutputFormat
from ._shared import ExitCode, exit_with_error, parse_assignments

OriginOption = Annotated[
    Path | None,
    Parameter(
        name=["--origin", "-o"],
        help="Directory templates are resolved from (default: current directory)",
    ),
]
FolderOption = Annotated[
    str | None,
    Parameter(
        name=["--folder", "-f"],
        help="Template folder below the origin (default: origin base folder)",
    ),
]
AliasOption = Annotated[
    list[str] | None,
    Parameter(
        name="--alias",
        help="Path fragment alias as ORIGINAL=REPLACEMENT, may be repeated",
        negative=(),
    ),
]
LookupOption = Annotated[
    bool,
    Parameter(name="--lookup", help="Also search theme override folders"),
]


def _fail(message: str, code: ExitCode) -> Never:
    exit_with_error(message, code, console=CLIContext.get_current().error_console)


def _build_engine(
    *,
    origin: Path | None,
    folder: str | None,
    alias: list[str] | None,
    lookup: bool,
    extract: bool = False,
) -> Template:
    ctx = CLIContext.get_current()
    config = ctx.config

    try:
        aliases = parse_assignments(alias, option="--alias")
    except ValueError as e:
        _fail(str(e), ExitCode.VALIDATION_ERROR)

    try:
        return Template(
            config,
            origin=origin if origin is not None else Path.cwd(),
            folder=folder if folder is not None else "/".join(config.origin_base_folder),
            aliases=aliases,
            folder_lookup=lookup,
            extract_context=extract,
            logger=ctx.logger,
        )
    except ConfigurationError as e:
        _fail(str(e), ExitCode.VALIDATION_ERROR)


def _build_context(
    context_json: str | None, assignments: list[str] | None
) -> dict[str, object]:
    context: dict[str, object] = {}
    if context_json is not None:
        parsed = load_json(context_json)
        if not isinstance(parsed, dict):
            _fail("--context-json must be a JSON object", ExitCode.VALIDATION_ERROR)
        context.update(parsed)

    try:
        values = parse_assignments(assignments, option="--set")
    except ValueError as e:
        _fail(str(e), ExitCode.VALIDATION_ERROR)
    for key, value in values.items():
        set_nested(context, key, parse_string_value(value))
    return context


def render(
    name: str,
    *,
    origin: OriginOption = None,
    folder: FolderOption = None,
    alias: AliasOption = None,
    lookup: LookupOption = False,
    extract: Annotated[
        bool,
        Parameter(name="--extract", help="Bind context keys as names in templates"),
    ] = False,
    context_json: Annotated[
        str | None,
        Parameter(name="--context-json", help="Render context as a JSON object"),
    ] = None,
    assignments: Annotated[
        list[str] | None,
        Parameter(
            name="--set",
            help="Context value as KEY=VALUE (dotted keys nest), may be repeated",
            negative=(),
        ),
    ] = None,
) -> None:
    """Render a template and print its markup

    NAME is the slash separated template name without extension, relative to
    the template folder (for example "product/card").

    Exit codes:
        0: Success
        1: Failed to load configuration
        2: Invalid configuration or options
        3: Template not found
        5: The template raised an error
    """
    engine = _build_engine(
        origin=origin, folder=folder, alias=alias, lookup=lookup, extract=extract
    )
    context = _build_context(context_json, assignments)

    try:
        html = engine.render(name, context, echo=False)
    except ConfigurationError as e:
        _fail(str(e), ExitCode.VALIDATION_ERROR)
    except Exception as e:
        engine.logger.exception("template_render_failed", name=name)
        _fail(f"Rendering {name}: {e}", ExitCode.INTERNAL_ERROR)

    if html is None:
        _fail(f"Template not found: {name}", ExitCode.NOT_FOUND)

    CLIContext.get_current().get_console().out(html, highlight=False)


def locate(
    name: str,
    *,
    origin: OriginOption = None,
    folder: FolderOption = None,
    alias: AliasOption = None,
    lookup: LookupOption = False,
) -> None:
    """Print the file a template name resolves to

    Exit codes:
        0: Success
        2: Invalid configuration or options
        3: Template not found
    """
    engine = _build_engine(origin=origin, folder=folder, alias=alias, lookup=lookup)

    path = engine.get_template_file(name)
    if path is None:
        _fail(f"Template not found: {name}", ExitCode.NOT_FOUND)

    CLIContext.get_current().get_console().out(str(path), highlight=False)


def _folder_rows(engine: Template) -> list[tuple[str, CandidateFolder]]:
    rows = [("plugin", folder) for folder in engine.get_template_path_list()]
    if engine.get_template_folder_lookup():
        rows.extend(("theme", folder) for folder in engine.get_template_theme_path_list())
    return rows


def paths(
    *,
    origin: OriginOption = None,
    folder: FolderOption = None,
    alias: AliasOption = None,
    lookup: LookupOption = False,
    format: Annotated[  # noqa: A002
        OutputFormat,
        Parameter(name="--format", help="Output format (table, json)"),
    ] = OutputFormat.TABLE,
) -> None:
    """List the candidate folders searched for templates

    Plugin folders are listed in search order, followed by theme override
    folders when --lookup is given.
    """
    engine = _build_engine(origin=origin, folder=folder, alias=alias, lookup=lookup)
    rows = _folder_rows(engine)
    console = CLIContext.get_current().get_console()

    if format == OutputFormat.JSON:
        console.out(
            dump_json([
                {
                    "source": source,
                    "id": candidate.id,
                    "priority": candidate.priority,
                    "path": candidate.path,
                    "namespace": candidate.namespace,
                    "exists": bool(candidate.path) and Path(candidate.path).is_dir(),
                }
                for source, candidate in rows
            ]),
            highlight=False,
        )
        return

    table = Table(title="Template folders")
    table.add_column("Source", style="cyan")
    table.add_column("ID")
    table.add_column("Priority", justify="right")
    table.add_column("Path")
    table.add_column("Exists")
    for source, candidate in rows:
        exists = bool(candidate.path) and Path(candidate.path).is_dir()
        table.add_row(
            source,
            candidate.id,
            "-" if candidate.priority is None else str(candidate.priority),
            candidate.path or "-",
            "[green]yes[/green]" if exists else "[dim]no[/dim]",
        )
    console.print(table)


def register_commands(app: App) -> None:
    app.command(render, name="render")
    app.command(locate, name="locate")
    app.command(paths, name="paths")
