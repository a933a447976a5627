"""Visualization data: activity tree, colors, and force-graph nodes."""

from .colors import apply_colors, file_type_color, interpolate_color
from .graph import ForceGraph, GraphNode, build_force_graph, to_graph
from .tree import DirectoryNode, FileNode, TreeNode, build_tree, iter_files

__all__ = [
    "DirectoryNode",
    "FileNode",
    "TreeNode",
    "build_tree",
    "iter_files",
    "apply_colors",
    "file_type_color",
    "interpolate_color",
    "GraphNode",
    "ForceGraph",
    "to_graph",
    "build_force_graph",
]
