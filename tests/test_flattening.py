"""Tests for flattening nested frontmatter into path/value entries."""

from frontmatter_infobox.flattening import flatten_properties, flatten_to_mapping


class TestFlattenProperties:
    def test_nested_yaml_example(self) -> None:
        """Lists contribute no segment; their dict elements recurse under the list's path."""
        data = {
            "image": "name.jpg",
            "nested": [
                {"child1": [{"grandchild1": "bobby"}, {"grandchild2": "alice"}]},
                {"child2": "greg"},
            ],
        }
        assert flatten_properties(data) == [
            ("image", "name.jpg"),
            ("nested.child1.grandchild1", "bobby"),
            ("nested.child1.grandchild2", "alice"),
            ("nested.child2", "greg"),
        ]

    def test_preserves_insertion_order(self) -> None:
        data = {"z": "1", "a": {"y": "2", "b": "3"}, "m": "4"}
        assert [p for p, _ in flatten_properties(data)] == ["z", "a.y", "a.b", "m"]

    def test_no_entry_for_objects_themselves(self) -> None:
        assert flatten_properties({"a": {"b": {"c": "v"}}}) == [("a.b.c", "v")]

    def test_empty_containers_produce_nothing(self) -> None:
        assert flatten_properties({"a": {}, "b": [], "c": "x"}) == [("c", "x")]

    def test_non_string_scalars_are_leaves(self) -> None:
        data = {"draft": True, "rating": 4, "missing": None}
        assert flatten_properties(data) == [("draft", True), ("rating", 4), ("missing", None)]

    def test_scalar_array_elements_share_the_array_path(self) -> None:
        assert flatten_properties({"tags": ["red", "blue"]}) == [("tags", "red"), ("tags", "blue")]

    def test_nested_lists_are_transparent(self) -> None:
        assert flatten_properties({"a": [[{"b": "v"}]]}) == [("a.b", "v")]


class TestSeparatorInjection:
    def test_slash_separator(self) -> None:
        assert flatten_properties({"a": {"b": "v"}}, "/") == [("a/b", "v")]

    def test_dot_separator(self) -> None:
        assert flatten_properties({"a": {"b": "v"}}, ".") == [("a.b", "v")]

    def test_only_path_strings_change(self) -> None:
        data = {"a": [{"b": "1"}, {"c": {"d": "2"}}], "e": "3"}
        dotted = flatten_properties(data, ".")
        arrows = flatten_properties(data, " > ")
        assert [v for _, v in dotted] == [v for _, v in arrows]
        assert [p.replace(".", " > ") for p, _ in dotted] == [p for p, _ in arrows]


class TestFlattenToMapping:
    def test_array_scalars_collapse_to_last(self) -> None:
        """Only the last bare scalar of a list survives under the shared path."""
        assert flatten_to_mapping({"tags": ["red", "blue"]}) == {"tags": "blue"}

    def test_collapsed_key_keeps_first_position(self) -> None:
        flat = flatten_to_mapping({"tags": ["red", "blue"], "title": "T"})
        assert list(flat) == ["tags", "title"]

    def test_mapping_matches_entries_without_collisions(self) -> None:
        data = {"a": {"b": "1"}, "list": [{"x": "2"}, {"y": "3"}]}
        assert flatten_to_mapping(data) == dict(flatten_properties(data))
