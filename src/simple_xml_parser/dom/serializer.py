"""Render DOM entities back to the simplified XML dialect.

Compact output (the default) re-parses to an identical tree. Anything the
parser would read back differently is rejected with ``SerializationError``
rather than written. Indented output is meant for people: the added line breaks
become part of tag text when read back.

The tree is walked with an explicit stack, so nesting depth is bounded by
memory rather than by the interpreter recursion limit.
"""

from typing import List, Optional, TextIO, Tuple, Union

from simple_xml_parser.parsing.cursor import is_alpha, is_name_char, is_space
from simple_xml_parser.shared.config import SerializerConfig
from simple_xml_parser.shared.errors import SerializationError

from .entity import DomEntity, EntityType

XML_DECLARATION = '<?xml version="1.0"?>'

# Pending output: literal text, or an entity still to be opened at a level
_WorkItem = Union[str, Tuple[DomEntity, int]]


class XMLSerializer:
    """Serialize documents, tags and comments to text."""

    def __init__(self, config: Optional[SerializerConfig] = None) -> None:
        self.config = config or SerializerConfig()

    def serialize(self, entity: DomEntity) -> str:
        """Return the text form of ``entity`` and its subtree.

        Raises:
            SerializationError: For attribute entities, invalid names, or values
                the dialect cannot read back unchanged
        """
        parts: List[str] = []
        if entity.type is EntityType.ATTRIBUTE:
            raise SerializationError(
                f"cannot serialize attribute {entity.name!r} on its own"
            )
        if entity.type is EntityType.DOCUMENT:
            self._write_document(entity, parts)
        else:
            self._write_subtree(entity, parts)
        return "".join(parts)

    def write(self, entity: DomEntity, stream: TextIO) -> None:
        """Serialize ``entity`` into a text stream."""
        stream.write(self.serialize(entity))

    def _write_document(self, document: DomEntity, parts: List[str]) -> None:
        if self.config.include_declaration:
            parts.append(XML_DECLARATION)
            parts.append("\n")
        for child in document.children:
            if child.type is EntityType.ATTRIBUTE:
                raise SerializationError(
                    f"attribute {child.name!r} on the document has no text form"
                )
            self._write_subtree(child, parts)
            parts.append("\n")

    def _write_subtree(self, root: DomEntity, parts: List[str]) -> None:
        indent = self.config.indent
        stack: List[_WorkItem] = [(root, 0)]
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
                continue

            entity, level = item
            if entity.type is EntityType.COMMENT:
                parts.append(_comment_text(entity))
                continue

            content = self._open_tag(entity, parts)
            if not content and not entity.value:
                parts.append("/>")
                continue

            _check_text(entity)
            parts.append(">")
            parts.append(entity.value)
            closing = f"</{entity.name}>"
            if indent is not None and content:
                closing = "\n" + " " * (indent * level) + closing
            stack.append(closing)
            for child in reversed(content):
                stack.append((child, level + 1))
                if indent is not None:
                    stack.append("\n" + " " * (indent * (level + 1)))

    def _open_tag(self, tag: DomEntity, parts: List[str]) -> List[DomEntity]:
        """Write ``<name attr="v"...`` and return the non-attribute children."""
        _check_name(tag.name)
        parts.append(f"<{tag.name}")
        content: List[DomEntity] = []
        for child in tag.children:
            if child.type is EntityType.ATTRIBUTE:
                _check_name(child.name)
                if '"' in child.value:
                    raise SerializationError(
                        f"attribute {child.name!r} value contains a double quote"
                    )
                parts.append(f' {child.name}="{child.value}"')
            else:
                content.append(child)
        return content


def _check_name(name: str) -> None:
    if not name or not is_alpha(name[0]) or not all(is_name_char(c) for c in name):
        raise SerializationError(f"{name!r} is not a valid xml name")


def _check_text(tag: DomEntity) -> None:
    # The parser skips whitespace before reading tag text
    if "<" in tag.value:
        raise SerializationError(f"text of <{tag.name}> contains '<'")
    if is_space(tag.value[:1]):
        raise SerializationError(f"text of <{tag.name}> starts with whitespace")


def _comment_text(comment: DomEntity) -> str:
    if "-->" in comment.value:
        raise SerializationError("comment text contains '-->'")
    # Comment text is read back stripped
    if comment.value != comment.value.strip():
        raise SerializationError("comment text has leading or trailing whitespace")
    return f"<!-- {comment.value} -->"


def serialize(entity: DomEntity, config: Optional[SerializerConfig] = None) -> str:
    """Serialize ``entity`` with an ad-hoc ``XMLSerializer``."""
    return XMLSerializer(config).serialize(entity)
