"""DOM entity tree for the simplified XML dialect.

Every node of a document is a ``DomEntity`` tagged with an ``EntityType``.
Attributes and comments are ordinary children of their tag, so one ordered
child list describes the whole content of a tag. Each child remembers its own
position in that list, which makes stepping to a neighbour constant time.
"""

import weakref
from enum import Enum, auto
from typing import Any, Dict, Iterator, List, Optional, Tuple

from simple_xml_parser.shared.config import SerializerConfig
from simple_xml_parser.shared.errors import DomError


class EntityType(Enum):
    """Kinds of DOM entities."""

    DOCUMENT = auto()
    TAG = auto()
    ATTRIBUTE = auto()
    COMMENT = auto()


_CONTAINER_TYPES = (EntityType.DOCUMENT, EntityType.TAG)
_NAMED_TYPES = (EntityType.TAG, EntityType.ATTRIBUTE)


class DomEntity:
    """A document, tag, attribute or comment node.

    ``value`` holds the tag text, the attribute value or the comment text and is
    unused for documents. The parent link is a weak reference: a node is owned
    only by its parent's child list, so dropping the document frees the tree.
    """

    __slots__ = ("_type", "name", "value", "_parent_ref", "_children", "_index",
                 "__weakref__")

    def __init__(self, entity_type: EntityType, name: str = "", value: str = "") -> None:
        if not isinstance(entity_type, EntityType):
            raise TypeError("entity_type must be an EntityType")
        if entity_type in _NAMED_TYPES and not name:
            raise ValueError(f"{entity_type.name.lower()} name cannot be empty")
        self._type = entity_type
        self.name = name
        self.value = value
        self._parent_ref: Optional["weakref.ReferenceType[DomEntity]"] = None
        self._children: List[DomEntity] = []
        self._index = -1

    @classmethod
    def document(cls) -> "DomEntity":
        """Create an empty document root."""
        return cls(EntityType.DOCUMENT)

    def __repr__(self) -> str:
        if self._type in _NAMED_TYPES:
            return f"<DomEntity {self._type.name} {self.name!r} value={self.value!r}>"
        return f"<DomEntity {self._type.name} value={self.value!r}>"

    def __str__(self) -> str:
        """Serialized text; raises ``SerializationError`` for attributes."""
        return self.to_xml()

    def __len__(self) -> int:
        return len(self._children)

    def __iter__(self) -> Iterator["DomEntity"]:
        return iter(tuple(self._children))

    @property
    def type(self) -> EntityType:
        """Kind of this entity."""
        return self._type

    @property
    def parent(self) -> Optional["DomEntity"]:
        """Owning entity, or None for roots."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def index(self) -> int:
        """Position within the parent's children, -1 for roots."""
        return self._index

    @property
    def children(self) -> Tuple["DomEntity", ...]:
        """All children in document order."""
        return tuple(self._children)

    @property
    def num_children(self) -> int:
        return len(self._children)

    @property
    def is_document(self) -> bool:
        return self._type is EntityType.DOCUMENT

    @property
    def is_tag(self) -> bool:
        return self._type is EntityType.TAG

    @property
    def is_attribute(self) -> bool:
        return self._type is EntityType.ATTRIBUTE

    @property
    def is_comment(self) -> bool:
        return self._type is EntityType.COMMENT

    @property
    def root(self) -> "DomEntity":
        """Topmost ancestor (the document for parsed trees)."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    @property
    def depth(self) -> int:
        """Number of ancestors (root = 0)."""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def get_child(self, index: int) -> "DomEntity":
        """Return the child at ``index``.

        Raises:
            IndexError: If ``index`` is outside ``0..num_children-1``
        """
        if not 0 <= index < len(self._children):
            raise IndexError(
                f"child index {index} out of range for {len(self._children)} children"
            )
        return self._children[index]

    # Mutation

    def add_child(self, child: "DomEntity") -> "DomEntity":
        """Append ``child`` and take ownership of it.

        Raises:
            DomError: If this entity cannot hold children, ``child`` is a
                document, already has a parent, or is an ancestor of this entity
        """
        if self._type not in _CONTAINER_TYPES:
            raise DomError(f"{self._type.name.lower()} entities cannot have children")
        if not isinstance(child, DomEntity):
            raise TypeError("Child must be a DomEntity instance")
        if child.is_document:
            raise DomError("a document cannot be added as a child")
        if child.parent is not None:
            raise DomError("entity already belongs to a parent")
        node: Optional[DomEntity] = self
        while node is not None:
            if node is child:
                raise DomError("adding this child would create a cycle")
            node = node.parent

        child._parent_ref = weakref.ref(self)
        child._index = len(self._children)
        self._children.append(child)
        return child

    def add_tag(self, name: str) -> "DomEntity":
        """Append a new tag named ``name`` and return it."""
        return self.add_child(DomEntity(EntityType.TAG, name))

    def add_attribute(self, name: str, value: str) -> "DomEntity":
        """Append a new attribute and return it."""
        return self.add_child(DomEntity(EntityType.ATTRIBUTE, name, value))

    def add_comment(self, text: str) -> "DomEntity":
        """Append a new comment and return it."""
        return self.add_child(DomEntity(EntityType.COMMENT, value=text))

    # Child queries

    def _matches(
        self, entity_type: Optional[EntityType], name: Optional[str]
    ) -> bool:
        if entity_type is not None and self._type is not entity_type:
            return False
        return name is None or self.name == name

    def _check_child(self, child: "DomEntity") -> None:
        if child.parent is not self:
            raise DomError(f"{child!r} is not a child of {self!r}")

    def _scan(
        self,
        start: int,
        step: int,
        entity_type: Optional[EntityType],
        name: Optional[str],
    ) -> Optional["DomEntity"]:
        index = start
        while 0 <= index < len(self._children):
            candidate = self._children[index]
            if candidate._matches(entity_type, name):
                return candidate
            index += step
        return None

    def first_child(
        self,
        entity_type: Optional[EntityType] = None,
        name: Optional[str] = None,
    ) -> Optional["DomEntity"]:
        """Return the first child matching the optional type and name."""
        return self._scan(0, 1, entity_type, name)

    def next_child(
        self,
        child: "DomEntity",
        entity_type: Optional[EntityType] = None,
        name: Optional[str] = None,
    ) -> Optional["DomEntity"]:
        """Return the first matching child after ``child``."""
        self._check_child(child)
        return self._scan(child._index + 1, 1, entity_type, name)

    def previous_child(
        self,
        child: "DomEntity",
        entity_type: Optional[EntityType] = None,
        name: Optional[str] = None,
    ) -> Optional["DomEntity"]:
        """Return the last matching child before ``child``."""
        self._check_child(child)
        return self._scan(child._index - 1, -1, entity_type, name)

    def first_child_tag(self, name: Optional[str] = None) -> Optional["DomEntity"]:
        return self.first_child(EntityType.TAG, name)

    def first_child_attribute(self, name: Optional[str] = None) -> Optional["DomEntity"]:
        return self.first_child(EntityType.ATTRIBUTE, name)

    def first_child_comment(self) -> Optional["DomEntity"]:
        return self.first_child(EntityType.COMMENT)

    def next_child_tag(
        self, child: "DomEntity", name: Optional[str] = None
    ) -> Optional["DomEntity"]:
        return self.next_child(child, EntityType.TAG, name)

    def next_child_attribute(
        self, child: "DomEntity", name: Optional[str] = None
    ) -> Optional["DomEntity"]:
        return self.next_child(child, EntityType.ATTRIBUTE, name)

    def next_child_comment(self, child: "DomEntity") -> Optional["DomEntity"]:
        return self.next_child(child, EntityType.COMMENT)

    def previous_child_tag(
        self, child: "DomEntity", name: Optional[str] = None
    ) -> Optional["DomEntity"]:
        return self.previous_child(child, EntityType.TAG, name)

    def previous_child_attribute(
        self, child: "DomEntity", name: Optional[str] = None
    ) -> Optional["DomEntity"]:
        return self.previous_child(child, EntityType.ATTRIBUTE, name)

    def previous_child_comment(self, child: "DomEntity") -> Optional["DomEntity"]:
        return self.previous_child(child, EntityType.COMMENT)

    # Sibling queries

    def next_sibling(
        self,
        entity_type: Optional[EntityType] = None,
        name: Optional[str] = None,
    ) -> Optional["DomEntity"]:
        """Return the next matching sibling, or None for roots."""
        parent = self.parent
        if parent is None:
            return None
        return parent.next_child(self, entity_type, name)

    def previous_sibling(
        self,
        entity_type: Optional[EntityType] = None,
        name: Optional[str] = None,
    ) -> Optional["DomEntity"]:
        """Return the previous matching sibling, or None for roots."""
        parent = self.parent
        if parent is None:
            return None
        return parent.previous_child(self, entity_type, name)

    def next_sibling_tag(self, name: Optional[str] = None) -> Optional["DomEntity"]:
        return self.next_sibling(EntityType.TAG, name)

    def next_sibling_attribute(self, name: Optional[str] = None) -> Optional["DomEntity"]:
        return self.next_sibling(EntityType.ATTRIBUTE, name)

    def next_sibling_comment(self) -> Optional["DomEntity"]:
        return self.next_sibling(EntityType.COMMENT)

    def previous_sibling_tag(self, name: Optional[str] = None) -> Optional["DomEntity"]:
        return self.previous_sibling(EntityType.TAG, name)

    def previous_sibling_attribute(
        self, name: Optional[str] = None
    ) -> Optional["DomEntity"]:
        return self.previous_sibling(EntityType.ATTRIBUTE, name)

    def previous_sibling_comment(self) -> Optional["DomEntity"]:
        return self.previous_sibling(EntityType.COMMENT)

    # Convenience lookups

    def iter_children(
        self,
        entity_type: Optional[EntityType] = None,
        name: Optional[str] = None,
    ) -> Iterator["DomEntity"]:
        """Yield matching children in document order."""
        child = self.first_child(entity_type, name)
        while child is not None:
            yield child
            child = self.next_child(child, entity_type, name)

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get the value of the first attribute called ``name``."""
        attribute = self.first_child_attribute(name)
        return attribute.value if attribute is not None else default

    @property
    def attributes(self) -> Dict[str, str]:
        """Attribute name/value pairs; later duplicates win."""
        return {attr.name: attr.value for attr in self.iter_children(EntityType.ATTRIBUTE)}

    def find_all_tags(self, name: Optional[str] = None) -> List["DomEntity"]:
        """Find all descendant tags, optionally by name, in document order."""
        results = []
        stack = [child for child in reversed(self._children) if child.is_tag]
        while stack:
            tag = stack.pop()
            if name is None or tag.name == name:
                results.append(tag)
            stack.extend(child for child in reversed(tag._children) if child.is_tag)
        return results

    def find_tag(self, name: str) -> Optional["DomEntity"]:
        """Find the first descendant tag called ``name``."""
        return next(iter(self.find_all_tags(name)), None)

    # Output
    #
    # Walkers below use explicit stacks; hand-built trees have no depth limit.

    def _fields(self) -> Dict[str, Any]:
        fields: Dict[str, Any] = {"type": self._type.name}
        if self._type in _NAMED_TYPES:
            fields["name"] = self.name
        if not self.is_document:
            fields["value"] = self.value
        return fields

    def to_dict(self) -> Dict[str, Any]:
        """Convert the subtree to a JSON-friendly dictionary."""
        result = self._fields()
        pending = [(self, result)]
        while pending:
            entity, data = pending.pop()
            if not entity._children:
                continue
            data["children"] = []
            for child in entity._children:
                child_data = child._fields()
                data["children"].append(child_data)
                pending.append((child, child_data))
        return result

    def dump(self, scope: int = 0) -> str:
        """Return an indented listing of the subtree for debugging."""
        lines: List[str] = []
        stack = [(self, scope)]
        while stack:
            entity, level = stack.pop()
            lines.append("  " * level + entity._dump_line())
            stack.extend((child, level + 1) for child in reversed(entity._children))
        return "\n".join(lines)

    def _dump_line(self) -> str:
        if self.is_document:
            return "DOCUMENT"
        if self.is_tag:
            return f"TAG: {self.name}"
        if self.is_comment:
            return f"COMMENT: {self.value}"
        return f"ATTRIBUTE: {self.name}={self.value}"

    def to_xml(self, config: Optional[SerializerConfig] = None) -> str:
        """Serialize the subtree; see ``simple_xml_parser.dom.serializer``."""
        from .serializer import serialize

        return serialize(self, config)
