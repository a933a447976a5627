"""Color helpers: activity gradient for treemaps, file-type colors for graphs."""

import math
import re
from dataclasses import replace

from .tree import FileNode, TreeNode

# Gradient endpoints: untouched-recently gray to very-active dark green.
INACTIVE_COLOR = "#e5e5e5"
ACTIVE_COLOR = "#006400"

TEST_FILE_COLOR = "#808080"
DEFAULT_FILE_COLOR = "#808080"

EXTENSION_COLORS = {
    ".rb": "#E0115F",  # Ruby
    ".tsx": "#ADD8E6",  # TypeScript React
}

# Path segments and name fragments that mark a test file.
_TEST_PATH_RE = re.compile(r"(^|/)(__tests__|tests?)/|\.test\.|\.spec\.")

_HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def _parse_hex(color: str) -> tuple[int, int, int]:
    if not _HEX_RE.match(color):
        raise ValueError(f"expected a #rrggbb color, got {color!r}")
    return int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)


def _round_half_up(value: float) -> int:
    # round() would send 114.5 to 114; the reference palette expects 115.
    return int(math.floor(value + 0.5))


def interpolate_color(start: str, end: str, t: float) -> str:
    """Linearly interpolate between two ``#rrggbb`` colors in RGB space.

    *t* is clamped to [0, 1]; 0 gives *start* and 1 gives *end*.
    """
    t = min(1.0, max(0.0, t))
    channels = (
        _round_half_up(a + (b - a) * t) for a, b in zip(_parse_hex(start), _parse_hex(end))
    )
    return "#" + "".join(f"{c:02x}" for c in channels)


def frequency_to_color(score: float) -> str:
    """Map a [0, 1] frequency score onto the activity gradient."""
    return interpolate_color(INACTIVE_COLOR, ACTIVE_COLOR, score)


def apply_colors(tree: TreeNode) -> TreeNode:
    """Return a copy of *tree* with every file colored by its frequency score.

    The input tree is left untouched. Directories never get a color.
    """
    if isinstance(tree, FileNode):
        return replace(tree, color=frequency_to_color(tree.file_data.frequency_score))
    return replace(tree, children=tuple(apply_colors(c) for c in tree.children))


def is_test_path(file_path: str) -> bool:
    return bool(_TEST_PATH_RE.search(file_path))


def file_type_color(file_path: str) -> str:
    """Pick a graph color from the file's path.

    Test locations win over extensions, so ``User.test.rb`` is gray.
    """
    if is_test_path(file_path):
        return TEST_FILE_COLOR
    for extension, color in EXTENSION_COLORS.items():
        if file_path.endswith(extension):
            return color
    return DEFAULT_FILE_COLOR


__all__ = [
    "ACTIVE_COLOR",
    "INACTIVE_COLOR",
    "TEST_FILE_COLOR",
    "apply_colors",
    "file_type_color",
    "frequency_to_color",
    "interpolate_color",
    "is_test_path",
]
