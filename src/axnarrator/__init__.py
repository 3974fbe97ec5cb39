"""
axnarrator: accessibility tree narration.
This is the root package containing the rendering engines, exporters and the viewer.
"""

from domain_models.manifest import AXNode, AXTree
from axnarrator.engines.renderer import RoleRenderer, render_tree
from axnarrator.engines.tree_index import TreeIndex
from axnarrator.exporters.html import export_to_html
from axnarrator.exporters.text import export_to_text

__all__ = [
    "AXNode",
    "AXTree",
    "RoleRenderer",
    "TreeIndex",
    "export_to_html",
    "export_to_text",
    "render_tree",
]
