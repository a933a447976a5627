"""Tests for activity colors and file-type colors."""

import pytest

from repo_heatmap.visualization.colors import (
    ACTIVE_COLOR,
    INACTIVE_COLOR,
    apply_colors,
    file_type_color,
    interpolate_color,
)
from repo_heatmap.visualization.tree import DirectoryNode, build_tree, find_node, iter_files

from conftest import make_file


class TestInterpolateColor:
    def test_midpoint(self):
        assert interpolate_color(INACTIVE_COLOR, ACTIVE_COLOR, 0.5) == "#73a573"

    def test_tenth(self):
        assert interpolate_color(INACTIVE_COLOR, ACTIVE_COLOR, 0.1) == "#ced8ce"

    def test_endpoints(self):
        assert interpolate_color(INACTIVE_COLOR, ACTIVE_COLOR, 0.0) == INACTIVE_COLOR
        assert interpolate_color(INACTIVE_COLOR, ACTIVE_COLOR, 1.0) == ACTIVE_COLOR

    def test_clamps(self):
        assert interpolate_color(INACTIVE_COLOR, ACTIVE_COLOR, -3.0) == INACTIVE_COLOR
        assert interpolate_color(INACTIVE_COLOR, ACTIVE_COLOR, 7.5) == ACTIVE_COLOR

    def test_zero_padding(self):
        assert interpolate_color("#000000", "#101010", 0.5) == "#080808"

    def test_rejects_malformed(self):
        with pytest.raises(ValueError):
            interpolate_color("e5e5e5", ACTIVE_COLOR, 0.5)


class TestApplyColors:
    @pytest.fixture
    def tree(self):
        return build_tree(
            [
                make_file("src/App.tsx", 10, 5, 0.5),
                make_file("src/utils.ts", 5, 1, 0.1),
            ]
        )

    def test_colors_files_by_score(self, tree):
        colored = apply_colors(tree)
        assert find_node(colored, "src/App.tsx").color == "#73a573"
        assert find_node(colored, "src/utils.ts").color == "#ced8ce"

    def test_folders_have_no_color(self, tree):
        colored = apply_colors(tree)
        assert not hasattr(colored, "color")
        assert not hasattr(find_node(colored, "src"), "color")

    def test_input_tree_untouched(self, tree):
        apply_colors(tree)
        assert all(f.color is None for f in iter_files(tree))

    def test_structure_and_values_preserved(self, tree):
        colored = apply_colors(tree)
        assert colored.value == tree.value
        assert [f.path for f in iter_files(colored)] == [f.path for f in iter_files(tree)]

    def test_empty_tree(self):
        colored = apply_colors(build_tree([]))
        assert isinstance(colored, DirectoryNode)
        assert colored.children == ()


class TestFileTypeColor:
    @pytest.mark.parametrize("path", ["app/models/user.rb", "lib/helper.rb", "script.rb"])
    def test_ruby(self, path):
        assert file_type_color(path) == "#E0115F"

    @pytest.mark.parametrize("path", ["components/Button.tsx", "App.tsx"])
    def test_tsx(self, path):
        assert file_type_color(path) == "#ADD8E6"

    @pytest.mark.parametrize(
        "path",
        [
            "__tests__/helper.ts",
            "src/__tests__/utils.tsx",
            "test/unit.ts",
            "tests/integration.ts",
            "lib/test/foo.rb",
            "Button.test.tsx",
            "utils.test.ts",
            "api.spec.js",
            "component.spec.tsx",
        ],
    )
    def test_test_files_are_gray(self, path):
        assert file_type_color(path) == "#808080"

    @pytest.mark.parametrize(
        "path", ["User.test.rb", "Component.test.tsx", "__tests__/model.rb", "model.test.rb"]
    )
    def test_test_pattern_beats_extension(self, path):
        assert file_type_color(path) == "#808080"

    @pytest.mark.parametrize("path", ["README.md", "package.json", "src/utils.ts", ""])
    def test_other_files_are_gray(self, path):
        assert file_type_color(path) == "#808080"

    def test_test_word_inside_directory_name_is_not_a_test(self):
        assert file_type_color("contest/entry.rb") == "#E0115F"
        assert file_type_color("latest/view.tsx") == "#ADD8E6"

    def test_name_marker_in_directory_segment(self):
        assert file_type_color("foo.test.d/x.rb") == "#808080"
        assert file_type_color("fixtures.spec.d/page.tsx") == "#808080"
