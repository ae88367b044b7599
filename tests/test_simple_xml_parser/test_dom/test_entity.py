"""Tests for DOM entities and navigation."""

import gc
import weakref

import pytest

from simple_xml_parser.dom.entity import DomEntity, EntityType
from simple_xml_parser.shared.errors import DomError


@pytest.fixture
def mixed_tag():
    """A tag whose children interleave attributes, tags and comments."""
    document = DomEntity.document()
    root = document.add_tag("root")
    root.add_attribute("id", "1")
    root.add_tag("item")
    root.add_comment("note")
    root.add_tag("other")
    root.add_tag("item")
    root.add_attribute("kind", "list")
    root.add_tag("item")
    return document, root


class TestConstruction:
    """Test entity creation and ownership."""

    def test_document_defaults(self):
        document = DomEntity.document()
        assert document.is_document
        assert document.parent is None
        assert document.index == -1
        assert document.num_children == 0

    def test_invalid_type(self):
        with pytest.raises(TypeError, match="must be an EntityType"):
            DomEntity("tag", "a")

    def test_named_types_need_name(self):
        with pytest.raises(ValueError, match="tag name cannot be empty"):
            DomEntity(EntityType.TAG)

    def test_add_child_sets_parent_and_index(self):
        document = DomEntity.document()
        first = document.add_tag("a")
        second = document.add_comment("c")

        assert first.parent is document
        assert (first.index, second.index) == (0, 1)
        assert document.get_child(1) is second
        assert len(document) == 2

    def test_get_child_out_of_range(self):
        with pytest.raises(IndexError, match="out of range"):
            DomEntity.document().get_child(0)

    def test_leaves_cannot_have_children(self):
        comment = DomEntity(EntityType.COMMENT, value="c")
        with pytest.raises(DomError, match="comment entities cannot have children"):
            comment.add_tag("a")

    def test_document_cannot_be_child(self):
        with pytest.raises(DomError, match="document cannot be added"):
            DomEntity.document().add_child(DomEntity.document())

    def test_child_cannot_have_two_parents(self):
        owner = DomEntity.document()
        tag = owner.add_tag("a")
        with pytest.raises(DomError, match="already belongs to a parent"):
            DomEntity.document().add_child(tag)

    def test_cycle_rejected(self):
        outer = DomEntity(EntityType.TAG, "outer")
        inner = outer.add_tag("inner")
        with pytest.raises(DomError, match="cycle"):
            inner.add_child(outer)

    def test_non_entity_child(self):
        with pytest.raises(TypeError, match="DomEntity instance"):
            DomEntity.document().add_child("a")

    def test_root_and_depth(self):
        document = DomEntity.document()
        leaf = document.add_tag("a").add_tag("b")
        assert leaf.root is document
        assert leaf.depth == 2
        assert document.depth == 0

    def test_dropping_document_frees_tree(self):
        document = DomEntity.document()
        tag_ref = weakref.ref(document.add_tag("a"))
        kept = document.add_tag("b")

        del document
        gc.collect()

        assert tag_ref() is None
        assert kept.parent is None


class TestChildNavigation:
    """Test first/next/previous child queries."""

    def test_next_child_walks_every_child(self, mixed_tag):
        _, root = mixed_tag
        visited = []
        child = root.first_child()
        while child is not None:
            visited.append(child.index)
            child = root.next_child(child)
        assert visited == list(range(root.num_children))

    def test_previous_child_walks_backwards(self, mixed_tag):
        _, root = mixed_tag
        child = root.get_child(root.num_children - 1)
        visited = []
        while child is not None:
            visited.append(child.index)
            child = root.previous_child(child)
        assert visited == list(reversed(range(root.num_children)))

    def test_previous_child_of_first_is_none(self, mixed_tag):
        _, root = mixed_tag
        assert root.previous_child(root.get_child(0)) is None

    def test_first_child_tag_by_name(self, mixed_tag):
        _, root = mixed_tag
        item = root.first_child_tag("item")
        assert item.index == 1
        assert root.first_child_tag().name == "item"
        assert root.first_child_tag("missing") is None

    def test_next_child_tag_visits_each_match_once(self, mixed_tag):
        _, root = mixed_tag
        indices = []
        item = root.first_child_tag("item")
        while item is not None:
            indices.append(item.index)
            item = root.next_child_tag(item, "item")
        assert indices == [1, 4, 6]

    def test_previous_child_tag(self, mixed_tag):
        _, root = mixed_tag
        last = root.get_child(6)
        assert root.previous_child_tag(last).name == "item"
        assert root.previous_child_tag(last).index == 4
        assert root.previous_child_tag(last, "other").index == 3

    def test_attribute_and_comment_variants(self, mixed_tag):
        _, root = mixed_tag
        first_attr = root.first_child_attribute()
        assert first_attr.name == "id"
        assert root.next_child_attribute(first_attr).name == "kind"
        assert root.previous_child_attribute(root.get_child(5)) is first_attr
        comment = root.first_child_comment()
        assert comment.value == "note"
        assert root.next_child_comment(comment) is None
        assert root.previous_child_comment(root.get_child(6)) is comment

    def test_foreign_child_rejected(self, mixed_tag):
        _, root = mixed_tag
        other = DomEntity.document()
        stranger = other.add_tag("x")
        with pytest.raises(DomError, match="is not a child of"):
            root.next_child(stranger)


class TestSiblingNavigation:
    """Test sibling queries."""

    def test_siblings(self, mixed_tag):
        _, root = mixed_tag
        item = root.first_child_tag("item")
        assert item.next_sibling().is_comment
        assert item.next_sibling_tag().name == "other"
        assert item.next_sibling_tag("item").index == 4
        assert item.previous_sibling_attribute().name == "id"
        assert item.previous_sibling_tag() is None
        assert item.next_sibling_comment().value == "note"
        assert root.get_child(6).previous_sibling_comment().value == "note"
        assert root.get_child(6).next_sibling_attribute() is None

    def test_root_has_no_siblings(self):
        document = DomEntity.document()
        assert document.next_sibling() is None
        assert document.previous_sibling() is None


class TestLookups:
    """Test convenience lookups and output."""

    def test_attributes(self, mixed_tag):
        _, root = mixed_tag
        assert root.attributes == {"id": "1", "kind": "list"}
        assert root.get_attribute("id") == "1"
        assert root.get_attribute("missing", "none") == "none"

    def test_iter_children(self, mixed_tag):
        _, root = mixed_tag
        names = [tag.name for tag in root.iter_children(EntityType.TAG)]
        assert names == ["item", "other", "item", "item"]

    def test_find_all_tags(self):
        document = DomEntity.document()
        outer = document.add_tag("a")
        outer.add_tag("b").add_tag("a")
        outer.add_tag("a")

        assert [tag.depth for tag in document.find_all_tags("a")] == [1, 3, 2]
        assert len(document.find_all_tags()) == 4
        assert document.find_tag("b").name == "b"
        assert document.find_tag("zzz") is None

    def test_to_dict(self):
        document = DomEntity.document()
        tag = document.add_tag("a")
        tag.value = "hi"
        tag.add_attribute("x", "1")

        assert document.to_dict() == {
            "type": "DOCUMENT",
            "children": [{
                "type": "TAG",
                "name": "a",
                "value": "hi",
                "children": [{"type": "ATTRIBUTE", "name": "x", "value": "1"}],
            }],
        }

    def test_dump(self):
        document = DomEntity.document()
        tag = document.add_tag("a")
        tag.add_attribute("x", "1")
        tag.add_comment("c")

        assert document.dump() == (
            "DOCUMENT\n"
            "  TAG: a\n"
            "    ATTRIBUTE: x=1\n"
            "    COMMENT: c"
        )


class TestDeepTrees:
    """Test walkers on trees nested deeper than the recursion limit."""

    @pytest.fixture
    def chain(self):
        document = DomEntity.document()
        node = document
        for _ in range(2000):
            node = node.add_tag("n")
        node.add_comment("bottom")
        return document

    def test_find_all_tags(self, chain):
        tags = chain.find_all_tags("n")
        assert len(tags) == 2000
        assert [tag.depth for tag in tags[:3]] == [1, 2, 3]
        assert chain.find_tag("n") is tags[0]

    def test_to_dict(self, chain):
        data = chain.to_dict()
        levels = 0
        while data["children"][0]["type"] == "TAG":
            data = data["children"][0]
            levels += 1
        assert levels == 2000
        assert data["children"] == [{"type": "COMMENT", "value": "bottom"}]

    def test_dump(self, chain):
        lines = chain.dump().splitlines()
        assert len(lines) == 2002
        assert lines[-1] == "  " * 2001 + "COMMENT: bottom"
