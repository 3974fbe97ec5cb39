import logging
from pathlib import Path
from typing import Annotated, NoReturn

import panel as pn
import typer
from pydantic_core import PydanticSerializationError

from domain_models.config import RenderConfig
from domain_models.constants import MAX_DEPTH_LIMIT
from domain_models.fragments import Fragment
from domain_models.manifest import AXTree
from domain_models.types import OutputFormat
from axnarrator.config import configure_logging
from axnarrator.engines.renderer import render_tree
from axnarrator.exceptions import TreeLoadError
from axnarrator.exporters.html import render_page
from axnarrator.exporters.json_tree import export_to_json
from axnarrator.exporters.text import export_to_text
from axnarrator.ui.canvas import NarrationCanvas
from axnarrator.ui.session import ViewerSession
from axnarrator.utils.io import load_example_tree, read_tree

configure_logging()
logger = logging.getLogger(__name__)

app = typer.Typer(
    name="axnarrator",
    help="axnarrator: Narrate Chrome accessibility tree dumps the way a screen reader reads them.",
    add_completion=False,
)

# Initialize defaults once to use in help text
DEFAULT_CONFIG = RenderConfig.default()


def _fail_with_error(message: str) -> NoReturn:
    """Centralized error handling: Log error and exit with code 1."""
    typer.echo(message, err=True)
    logger.error(message)
    raise typer.Exit(code=1)


def _format_output(fragment: Fragment, output_format: OutputFormat, title: str) -> str:
    """Serialize a rendered fragment tree in the requested format."""
    if output_format is OutputFormat.HTML:
        return render_page(fragment, title=title)
    if output_format is OutputFormat.JSON:
        return export_to_json(fragment) + "\n"
    return export_to_text(fragment) + "\n"


def _emit(tree: AXTree, config: RenderConfig, output: Path | None, title: str) -> None:
    """Render a tree and write it to the output file or stdout."""
    fragment = render_tree(tree, config)
    try:
        content = _format_output(fragment, config.output_format, title)
    except (PydanticSerializationError, RecursionError) as e:
        _fail_with_error(f"Error serializing narration: {e}")
    if output is None:
        typer.echo(content, nl=False)
        return
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding="utf-8")
    except OSError as e:
        _fail_with_error(f"Error writing output: {e}")
    typer.echo(f"Narration written to {output}", err=True)


OutputFormatOption = Annotated[
    OutputFormat, typer.Option("--format", "-f", help="Output format: text, html or json.")
]
OutputPathOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="File to write the narration to (default: stdout).",
        dir_okay=False,
        writable=True,
    ),
]


@app.command()
def render(
    input_file: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Path to the accessibility tree dump (JSON).",
        ),
    ],
    output_format: OutputFormatOption = DEFAULT_CONFIG.output_format,
    output: OutputPathOption = None,
    max_depth: Annotated[
        int,
        typer.Option(
            "--max-depth", min=1, max=MAX_DEPTH_LIMIT, help="Deepest nesting rendered."
        ),
    ] = DEFAULT_CONFIG.max_depth,
) -> None:
    """
    Render an accessibility tree dump as a narration.
    """
    config = RenderConfig(max_depth=max_depth, output_format=output_format)

    try:
        tree = read_tree(input_file, max_size_bytes=config.max_file_size_bytes)
    except (TreeLoadError, ValueError, OSError) as e:
        _fail_with_error(f"Error loading {input_file}: {e}")

    _emit(tree, config, output, title=input_file.name)


@app.command()
def example(
    output_format: OutputFormatOption = DEFAULT_CONFIG.output_format,
    output: OutputPathOption = None,
) -> None:
    """
    Render the bundled example tree.
    """
    config = RenderConfig(output_format=output_format)
    _emit(load_example_tree(), config, output, title="Example tree")


@app.command()
def serve(
    port: Annotated[
        int, typer.Option("--port", "-p", help="Port to serve on.")
    ] = DEFAULT_CONFIG.server_port,
) -> None:
    """
    Launch the interactive viewer (drop or paste a tree dump).

    The last loaded dump is kept for the whole server process, so every tab and
    client connected to it sees the same restored tree.
    """
    typer.echo(f"Starting axnarrator viewer on port {port}...")

    def create_view() -> pn.template.BaseTemplate:
        # One view model per page load; the store is the process-wide pn.state.cache.
        session = ViewerSession(store=pn.state.cache, config=DEFAULT_CONFIG)
        if not session.restore():
            session.load_example()
        return NarrationCanvas(session=session).layout

    try:
        # Bind to 127.0.0.1 to prevent external access
        pn.serve(create_view, port=port, address="127.0.0.1", show=False, title="axnarrator")  # type: ignore[no-untyped-call]
    except Exception as e:
        logger.exception("Error serving viewer")
        _fail_with_error(f"Error serving viewer: {e}")


if __name__ == "__main__":
    app()
