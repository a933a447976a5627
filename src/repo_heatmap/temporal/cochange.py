"""Count how often pairs of displayed files change in the same commit."""

from collections import defaultdict
from itertools import combinations
from typing import Iterable

from .models import CommitRecord, GraphLink


def build_cochange_links(
    commits: Iterable[CommitRecord],
    displayed_files: set[str],
    max_files_per_commit: int = 50,
) -> list[GraphLink]:
    """Build force-graph links from commit history.

    Only includes:
    - Files in *displayed_files* (links must point at rendered nodes)
    - Commits that touch <= max_files_per_commit displayed files
      (bulk reformats would link everything to everything)

    Links are sorted by value descending, then by (source, target).
    """
    pair_counts: dict[tuple[str, str], int] = defaultdict(int)

    for commit in commits:
        relevant = sorted({f for f in commit.files if f in displayed_files})
        if len(relevant) < 2 or len(relevant) > max_files_per_commit:
            continue
        for a, b in combinations(relevant, 2):
            pair_counts[(a, b)] += 1

    links = [GraphLink(source=a, target=b, value=count) for (a, b), count in pair_counts.items()]
    links.sort(key=lambda link: (-link.value, link.source, link.target))
    return links
