"""
Repo Heatmap - Git Activity Treemaps

Reads a repository's recent commit history and turns it into a colored
directory tree (for treemaps) and a flat list of sized bubbles (for
force-directed graphs). Hot files are big and dark green; quiet ones fade
to gray.
"""

__version__ = "0.1.0"

from .api import analyze, analyze_repository, to_graph
from .temporal.models import CommitRecord, FileCommitData, TimeRangeConfig, TimeRangePreset
from .visualization.tree import DirectoryNode, FileNode

__all__ = [
    "analyze",  # Main entry point
    "analyze_repository",
    "to_graph",
    "CommitRecord",
    "FileCommitData",
    "TimeRangeConfig",
    "TimeRangePreset",
    "DirectoryNode",
    "FileNode",
]
