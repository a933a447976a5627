#!/usr/bin/env python3
"""
Example: Basic usage of Repo Heatmap as a Python library
"""

from repo_heatmap import analyze_repository, to_graph
from repo_heatmap.visualization import iter_files

# Analyze the last month of a repository
result = analyze_repository("/path/to/repo", "1m")

# Print the ten busiest files
files = sorted(iter_files(result.tree), key=lambda f: -f.file_data.total_commit_count)
for f in files[:10]:
    data = f.file_data
    print(f"{f.path}: {data.total_commit_count} commits "
          f"({data.recent_commit_count} recent, color {f.color})")

# Bubble sizes for a force-directed view
for node in to_graph(result.tree)[:5]:
    print(f"{node.file_name}: radius {node.radius:.1f}, color {node.color}")

meta = result.metadata
print(f"{meta.total_commits} commits, {meta.files_displayed}/{meta.total_files_analyzed} "
      f"files displayed ({meta.time_range_label})")
