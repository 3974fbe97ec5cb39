from axnarrator.exporters.html import export_to_html, render_page
from axnarrator.exporters.json_tree import export_to_json, fragment_to_data
from axnarrator.exporters.text import export_to_text, stream_text

__all__ = [
    "export_to_html",
    "export_to_json",
    "export_to_text",
    "fragment_to_data",
    "render_page",
    "stream_text",
]
