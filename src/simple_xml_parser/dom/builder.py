"""DOM builder: the event consumer that materializes a document tree.

The builder keeps a construction stack seeded with a fresh document. Opening
tags are appended to the stack top and pushed, closing tags pop. The stack
belongs to one builder, and one builder serves exactly one parse.
"""

from typing import List, Optional

from simple_xml_parser.shared.config import DomConfig, TextMode
from simple_xml_parser.shared.errors import DomError
from simple_xml_parser.shared.logging import get_logger

from .entity import DomEntity, EntityType


class DomBuilder:
    """Build a ``DomEntity`` tree from parser events."""

    def __init__(
        self,
        config: Optional[DomConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """Initialize tree builder.

        Args:
            config: DOM construction configuration
            correlation_id: Optional correlation ID for request tracking
        """
        self.config = config or DomConfig()
        self.logger = get_logger(__name__, correlation_id, "dom_builder")
        self.document = DomEntity.document()
        self._stack: List[DomEntity] = [self.document]
        self.entities_created = 0

    @property
    def current(self) -> DomEntity:
        """Entity that receives the next child, attribute or text."""
        return self._stack[-1]

    @property
    def open_tags(self) -> List[str]:
        """Names of tags that have begun but not ended, outermost first."""
        return [entity.name for entity in self._stack[1:]]

    def begin_tag(self, name: str) -> None:
        tag = self.current.add_tag(name)
        self.entities_created += 1
        self._stack.append(tag)

    def end_tag(self, name: str) -> None:
        # The parser has already matched the closing name.
        if len(self._stack) == 1:
            raise DomError(f"end of tag <{name}> without a matching begin")
        self._stack.pop()

    def text(self, text: str) -> None:
        target = self.current
        if self.config.text_mode is TextMode.CONCATENATE:
            target.value += text
        else:
            target.value = text

    def comment(self, text: str) -> None:
        self.current.add_comment(text)
        self.entities_created += 1

    def attribute(self, name: str, value: str) -> None:
        self.current.add_attribute(name, value)
        self.entities_created += 1

    def finish(self) -> DomEntity:
        """Return the document once every tag has been closed.

        Raises:
            DomError: If tags are still open
        """
        if len(self._stack) != 1:
            raise DomError(f"unclosed tags remain: {', '.join(self.open_tags)}")
        self.logger.debug(
            "Finished building document",
            extra={
                "entities_created": self.entities_created,
                "top_level_tags": sum(
                    1 for _ in self.document.iter_children(EntityType.TAG)
                ),
            },
        )
        return self.document
