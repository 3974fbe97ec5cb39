import logging
import typing
from collections.abc import MutableMapping

import param

from domain_models.config import RenderConfig
from domain_models.constants import SESSION_TREE_KEY
from domain_models.manifest import AXTree
from axnarrator.engines.renderer import render_tree
from axnarrator.exceptions import TreeLoadError
from axnarrator.exporters.html import export_to_html
from axnarrator.utils.io import parse_tree, read_example_text

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Drop (or paste) a Chrome accessibility tree dump (JSON file) here."


class ViewerSession(param.Parameterized):  # type: ignore[misc]
    """
    ViewModel for the narration viewer.
    Holds the active tree and its rendering, and persists the last loaded dump
    in a session store so a reload can pick it up again.
    """

    tree_json = param.String(default="", doc="Raw JSON of the active tree.")
    source_name = param.String(default="", doc="Where the active tree came from.")
    rendered_html = param.String(default="", doc="HTML narration of the active tree.")
    status_message = param.String(
        default=WELCOME_MESSAGE, doc="Status message to display to the user."
    )

    def __init__(
        self,
        store: MutableMapping[str, typing.Any] | None = None,
        config: RenderConfig | None = None,
        **params: typing.Any,
    ) -> None:
        super().__init__(**params)
        self.store: MutableMapping[str, typing.Any] = store if store is not None else {}
        self.config = config or RenderConfig.default()
        self.tree: AXTree | None = None

    def load_text(self, text: str, source: str = "pasted text") -> bool:
        """Load a pasted dump. Returns False and keeps the current tree on failure."""
        return self._load(text, source, persist=True)

    def load_bytes(self, data: bytes, filename: str) -> bool:
        """Load a dropped file."""
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            self.status_message = f"Could not load {filename}: not UTF-8 ({e})."
            logger.warning(self.status_message)
            return False
        return self._load(text, filename, persist=True)

    def load_example(self) -> bool:
        """Show the bundled example tree."""
        return self._load(read_example_text(), "example tree", persist=False)

    def restore(self) -> bool:
        """Reload the dump persisted by an earlier load, if there is one."""
        text = self.store.get(SESSION_TREE_KEY)
        if not text:
            return False
        return self._load(text, "previous session", persist=False)

    def _load(self, text: str, source: str, persist: bool) -> bool:
        size = len(text.encode("utf-8"))
        if size > self.config.max_file_size_bytes:
            self.status_message = (
                f"Could not load {source}: {size} bytes exceeds the "
                f"{self.config.max_file_size_bytes} byte limit."
            )
            logger.warning(self.status_message)
            return False

        try:
            tree = parse_tree(text)
        except TreeLoadError as e:
            self.status_message = f"Could not load {source}: {e}"
            logger.warning(self.status_message)
            return False

        fragment = render_tree(tree, self.config)
        self.tree = tree
        self.tree_json = text
        self.source_name = source
        self.rendered_html = export_to_html(fragment)
        self.status_message = f"Showing {source} ({len(tree.nodes)} nodes)."
        if persist:
            self.store[SESSION_TREE_KEY] = text
        return True
