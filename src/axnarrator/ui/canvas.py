from typing import Any

import panel as pn
import param

from axnarrator.exporters.html import STYLESHEET
from axnarrator.ui.session import ViewerSession

# Initialize panel extension
pn.extension("material")


class NarrationCanvas(param.Parameterized):  # type: ignore[misc]
    """
    The View component for the narration viewer.
    Defines the layout and binds to the ViewerSession ViewModel.
    """

    session = param.ClassSelector(class_=ViewerSession, allow_None=False)

    def __init__(self, **params: Any) -> None:
        super().__init__(**params)
        self._template: pn.template.MaterialTemplate | None = None
        self._create_components()

    def _create_components(self) -> None:
        """Initialize UI components."""

        # Sidebar: file drop
        self.file_input = pn.widgets.FileInput(
            accept=".json,application/json", multiple=False, sizing_mode="stretch_width"
        )
        self.file_input.param.watch(self._on_file_dropped, "value")

        # Sidebar: paste
        self.paste_input = pn.widgets.TextAreaInput(
            name="Paste JSON",
            placeholder="Paste an accessibility tree dump...",
            height=200,
            sizing_mode="stretch_width",
        )
        self.paste_button = pn.widgets.Button(name="Render", button_type="primary")
        self.paste_button.on_click(self._on_paste)

        self.example_button = pn.widgets.Button(name="Load example", button_type="light")
        self.example_button.on_click(lambda event: self.session.load_example())

        # Main Area
        self.status_view = pn.bind(self._render_status, self.session.param.status_message)
        self.tree_view = pn.bind(self._render_tree, self.session.param.rendered_html)

    def _on_file_dropped(self, event: Any) -> None:
        if event.new:
            self.session.load_bytes(event.new, self.file_input.filename or "dropped file")

    def _on_paste(self, event: Any) -> None:
        self.session.load_text(self.paste_input.value or "", "pasted text")

    def _render_status(self, message: str) -> pn.viewable.Viewable:
        return pn.pane.Markdown(message, sizing_mode="stretch_width")

    def _render_tree(self, html: str) -> pn.viewable.Viewable:
        """Render the narration, or a placeholder before any tree is loaded."""
        if not html:
            return pn.pane.Markdown("*No tree loaded.*")
        return pn.pane.HTML(f"<style>{STYLESHEET}</style>{html}", sizing_mode="stretch_width")

    @property
    def sidebar(self) -> pn.Column:
        return pn.Column(
            "## Load a tree",
            self.file_input,
            self.paste_input,
            self.paste_button,
            pn.layout.Divider(),
            self.example_button,
            sizing_mode="stretch_width",
        )

    @property
    def main_area(self) -> pn.Column:
        return pn.Column(
            self.status_view,
            pn.layout.Divider(),
            self.tree_view,
            sizing_mode="stretch_width",
        )

    @property
    def layout(self) -> pn.template.BaseTemplate:
        """Compose the final layout."""
        if self._template is None:
            self._template = pn.template.MaterialTemplate(
                title="Accessibility tree visualizer",
                sidebar=[self.sidebar],
                main=[self.main_area],
            )
        return self._template
