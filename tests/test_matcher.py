"""
Unit tests for MatcherImpl.
Verifies pre-order flattening, fingerprint grouping, ordering rules and name search.
"""
import pytest
from mediascanner.core.matcher import MatcherImpl
from mediascanner.core.models import Entry
from mediascanner.core.tree_builder import TreeBuilderImpl


def file_entry(name, fingerprint, level=0, parent=""):
    return Entry(name=name, path=f"{parent}/{name}", is_file=True, level=level, fingerprint=fingerprint)


def dir_entry(name, children, level=0, parent=""):
    return Entry(name=name, path=f"{parent}/{name}", is_file=False, level=level, children=children)


@pytest.fixture
def sample_tree():
    """
    /x.jpg      h1
    /d/         (dir)
      /d/y.jpg  h1
      /d/e/     (dir)
        /d/e/z.jpg  h2
      /d/w.jpg  h2
    /v.jpg      h3
    """
    return [
        file_entry("x.jpg", b"h1"),
        dir_entry("d", [
            file_entry("y.jpg", b"h1", level=1, parent="/d"),
            dir_entry("e", [
                file_entry("z.jpg", b"h2", level=2, parent="/d/e"),
            ], level=1, parent="/d"),
            file_entry("w.jpg", b"h2", level=1, parent="/d"),
        ]),
        file_entry("v.jpg", b"h3"),
    ]


class TestFlatten:
    def test_pre_order_self_before_children(self, sample_tree):
        flat = MatcherImpl().flatten(sample_tree)

        assert [e.path for e in flat] == [
            "/x.jpg", "/d", "/d/y.jpg", "/d/e", "/d/e/z.jpg", "/d/w.jpg", "/v.jpg",
        ]

    def test_empty_tree(self):
        assert MatcherImpl().flatten([]) == []

    def test_deep_tree_does_not_hit_recursion_limit(self):
        entry = file_entry("leaf", b"h", level=2000)
        for level in range(1999, -1, -1):
            entry = dir_entry(f"d{level}", [entry], level=level)

        flat = MatcherImpl().flatten([entry])

        assert len(flat) == 2001
        assert flat[-1].name == "leaf"


class TestFindDuplicates:
    def test_groups_in_first_seen_order(self, sample_tree):
        groups = MatcherImpl().find_duplicates(sample_tree)

        assert [g.key for g in groups] == [b"h1", b"h2"]
        assert [m.path for m in groups[0].matches] == ["/x.jpg", "/d/y.jpg"]
        assert [m.path for m in groups[1].matches] == ["/d/e/z.jpg", "/d/w.jpg"]

    def test_unique_file_produces_no_group(self, sample_tree):
        groups = MatcherImpl().find_duplicates(sample_tree)

        all_paths = {m.path for g in groups for m in g.matches}
        assert "/v.jpg" not in all_paths

    def test_every_group_has_two_or_more_members(self, sample_tree):
        for group in MatcherImpl().find_duplicates(sample_tree):
            assert group.match_count >= 2
            assert group.is_duplicate()
            assert group.query is None

    def test_entries_without_fingerprint_never_group(self):
        tree = [
            file_entry("a", None),
            file_entry("b", None),
            file_entry("c", b"h"),
        ]

        assert MatcherImpl().find_duplicates(tree) == []

    def test_directories_never_group(self):
        tree = [dir_entry("a", []), dir_entry("b", [])]

        assert MatcherImpl().find_duplicates(tree) == []

    def test_matches_expose_name_and_path(self, sample_tree):
        group = MatcherImpl().find_duplicates(sample_tree)[0]

        assert group.matches[1].name == "y.jpg"
        assert group.matches[1].path == "/d/y.jpg"

    def test_hello_world_scenario(self, hello_world_tree, temp_dir):
        """a.txt and sub/b.txt share content; c.txt is unique."""
        tree = TreeBuilderImpl().build_tree(str(temp_dir))

        groups = MatcherImpl().find_duplicates(tree)

        assert len(groups) == 1
        assert {m.path for m in groups[0].matches} == {
            str(hello_world_tree["a"]), str(hello_world_tree["b"])}
        assert all(m.path != str(hello_world_tree["c"]) for m in groups[0].matches)

    def test_every_member_fingerprint_equals_key(self, test_files, temp_dir):
        tree = TreeBuilderImpl().build_tree(str(temp_dir))
        matcher = MatcherImpl()
        fingerprints = {e.path: e.fingerprint for e in matcher.flatten(tree)}

        groups = matcher.find_duplicates(tree)

        assert len(groups) == 2
        for group in groups:
            assert all(fingerprints[m.path] == group.key for m in group.matches)

    def test_repeated_runs_have_same_membership(self, test_files, temp_dir):
        def membership():
            tree = TreeBuilderImpl().build_tree(str(temp_dir))
            return {frozenset(m.path for m in g.matches) for g in MatcherImpl().find_duplicates(tree)}

        assert membership() == membership()


class TestFindMatching:
    def test_case_insensitive_substring(self, test_files, temp_dir):
        """Querying 'IMG' matches IMG_001.png and img_001_copy.png."""
        tree = TreeBuilderImpl().build_tree(str(temp_dir))

        groups = MatcherImpl().find_matching(tree, "IMG")

        assert len(groups) == 1
        assert {m.name for m in groups[0].matches} == {"IMG_001.png", "img_001_copy.png"}
        assert groups[0].query == "IMG"

    def test_lowercase_query_matches_uppercase_name(self):
        tree = [file_entry("IMG_001.JPG", b"h"), file_entry("img_002.jpg", b"h")]

        groups = MatcherImpl().find_matching(tree, "img")

        assert [m.name for m in groups[0].matches] == ["IMG_001.JPG", "img_002.jpg"]

    def test_same_name_different_content_not_grouped(self):
        tree = [file_entry("img_1.jpg", b"h1"), file_entry("img_2.jpg", b"h2")]

        assert MatcherImpl().find_matching(tree, "img") == []

    def test_singleton_match_suppressed(self, test_files, temp_dir):
        tree = TreeBuilderImpl().build_tree(str(temp_dir))

        assert MatcherImpl().find_matching(tree, "holiday") == []

    def test_entries_without_fingerprint_excluded(self):
        tree = [
            file_entry("img_a.jpg", None),
            file_entry("img_b.jpg", None),
            file_entry("img_c.jpg", b"h"),
            file_entry("img_d.jpg", b"h"),
        ]

        groups = MatcherImpl().find_matching(tree, "img")

        assert len(groups) == 1
        assert [m.name for m in groups[0].matches] == ["img_c.jpg", "img_d.jpg"]

    def test_matching_directory_names_are_ignored(self):
        tree = [
            dir_entry("img_dir", [file_entry("a.jpg", b"h", level=1, parent="/img_dir")]),
            file_entry("b.jpg", b"h"),
        ]

        assert MatcherImpl().find_matching(tree, "img") == []

    def test_empty_query_rejected(self, sample_tree):
        with pytest.raises(ValueError, match="empty"):
            MatcherImpl().find_matching(sample_tree, "")
