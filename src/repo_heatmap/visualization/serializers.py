"""Convert analysis structures to JSON-safe dicts.

Keys are camelCase because the browser front end consumes them directly::

    {
        "name": "App.tsx",
        "path": "src/App.tsx",
        "value": 10,
        "isFile": true,
        "color": "#73a573",
        "fileData": {
            "filePath": "src/App.tsx",
            "totalCommitCount": 10,
            "recentCommitCount": 5,
            "frequencyScore": 0.5
        }
    }

Directories carry ``children`` and never ``color``/``fileData``; files are
the reverse.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..temporal.models import FileCommitData, GraphLink, TimeRangeConfig
from .graph import ForceGraph, GraphNode
from .tree import FileNode, TreeNode

if TYPE_CHECKING:
    from ..api import AnalysisMetadata


def file_data_to_dict(data: FileCommitData) -> dict[str, Any]:
    return {
        "filePath": data.file_path,
        "totalCommitCount": data.total_commit_count,
        "recentCommitCount": data.recent_commit_count,
        "frequencyScore": round(data.frequency_score, 6),
    }


def tree_to_dict(node: TreeNode) -> dict[str, Any]:
    """Serialize a tree recursively."""
    result: dict[str, Any] = {
        "name": node.name,
        "path": node.path,
        "value": node.value,
        "isFile": node.is_file,
    }
    if isinstance(node, FileNode):
        if node.color is not None:
            result["color"] = node.color
        result["fileData"] = file_data_to_dict(node.file_data)
    else:
        result["children"] = [tree_to_dict(c) for c in node.children]
    return result


def graph_node_to_dict(node: GraphNode) -> dict[str, Any]:
    return {
        "id": node.id,
        "filePath": node.file_path,
        "fileName": node.file_name,
        "commitCount": node.commit_count,
        "radius": round(node.radius, 4),
        "color": node.color,
    }


def graph_link_to_dict(link: GraphLink) -> dict[str, Any]:
    return {"source": link.source, "target": link.target, "value": link.value}


def force_graph_to_dict(graph: ForceGraph) -> dict[str, Any]:
    return {
        "nodes": [graph_node_to_dict(n) for n in graph.nodes],
        "links": [graph_link_to_dict(link) for link in graph.links],
    }


def time_range_to_dict(time_range: TimeRangeConfig) -> dict[str, Any]:
    return {
        "startDate": time_range.start_date.isoformat(),
        "endDate": time_range.end_date.isoformat(),
        "midpoint": time_range.midpoint.isoformat(),
        "label": time_range.label,
        "preset": time_range.preset.value,
    }


def metadata_to_dict(metadata: AnalysisMetadata) -> dict[str, Any]:
    return {
        "totalFilesAnalyzed": metadata.total_files_analyzed,
        "filesDisplayed": metadata.files_displayed,
        "totalCommits": metadata.total_commits,
        "timeRange": metadata.time_range_label,
        "analysisDurationMs": metadata.analysis_duration_ms,
    }
