import json
import logging
from importlib import resources
from pathlib import Path

from pydantic import ValidationError

from domain_models.manifest import AXTree
from axnarrator.exceptions import TreeLoadError

logger = logging.getLogger(__name__)

EXAMPLE_TREE_RESOURCE = "example_tree.json"


def parse_tree(text: str | bytes) -> AXTree:
    """
    Parse an accessibility tree dump.

    Accepts the CDP `{"nodes": [...]}` object or a bare array of nodes.

    Raises:
        TreeLoadError: If the payload is not JSON or does not match the tree schema.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        msg = f"Invalid JSON: {e}"
        raise TreeLoadError(msg) from e

    try:
        tree = AXTree.model_validate(data)
    except ValidationError as e:
        msg = f"Not an accessibility tree: {e.error_count()} validation error(s). {e}"
        raise TreeLoadError(msg) from e

    logger.debug(f"Parsed accessibility tree with {len(tree.nodes)} nodes.")
    return tree


def read_tree(filepath: str | Path, max_size_bytes: int | None = None) -> AXTree:
    """
    Read and parse an accessibility tree dump from a file (UTF-8 JSON).

    Args:
        filepath: Path to the file.
        max_size_bytes: Optional upper bound on the file size.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the path is not a regular file.
        TreeLoadError: If the file is too large or its content is not a tree.
    """
    path = Path(filepath)

    if not path.exists():
        msg = f"File not found: {filepath}"
        raise FileNotFoundError(msg)

    if not path.is_file():
        msg = f"Not a file: {filepath}"
        raise ValueError(msg)

    size = path.stat().st_size
    if max_size_bytes is not None and size > max_size_bytes:
        msg = f"File too large: {size} bytes. Limit is {max_size_bytes / (1024 * 1024):.2f}MB."
        raise TreeLoadError(msg)

    return parse_tree(path.read_text(encoding="utf-8"))


def read_example_text() -> str:
    """Return the raw JSON of the bundled example tree."""
    return resources.files("axnarrator.data").joinpath(EXAMPLE_TREE_RESOURCE).read_text(
        encoding="utf-8"
    )


def load_example_tree() -> AXTree:
    """Load the example tree shipped with the package."""
    return parse_tree(read_example_text())
