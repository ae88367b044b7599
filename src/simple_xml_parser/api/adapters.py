"""Integration adapters between DOM trees and other XML libraries.

Adapters convert in both directions and report the outcome through a
``ConversionResult`` instead of raising, matching the parse entry points.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from simple_xml_parser.dom.entity import DomEntity, EntityType
from simple_xml_parser.shared import DomError, get_logger

MS_PER_SECOND = 1000


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    target_library: str
    description: str


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


class IntegrationAdapter(ABC):
    """Bidirectional conversion between ``DomEntity`` trees and a target format."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library can be imported."""

    @abstractmethod
    def to_target(self, entity: DomEntity) -> ConversionResult:
        """Convert a document or tag into the target representation."""

    @abstractmethod
    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert target data into a new document."""

    def _create_error_result(
        self, message: str, original_data: Any, start_time: float
    ) -> ConversionResult:
        self._logger.warning(message, extra={"adapter": self.metadata.name})
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=(time.perf_counter() - start_time) * MS_PER_SECOND,
            errors=[message],
        )


class LxmlAdapter(IntegrationAdapter):
    """Adapter for conversion to and from ``lxml.etree`` elements.

    A document converts to the element of its single top-level tag; top-level
    comments are not carried over. Tag text becomes ``element.text``; when
    reading from lxml, ``text`` and child ``tail`` strings are joined.
    """

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="lxml",
            target_library="lxml",
            description="Bidirectional conversion between DomEntity and lxml.etree",
        )

    def is_available(self) -> bool:
        try:
            import lxml.etree  # noqa: F401
        except ImportError:
            return False
        return True

    def to_target(self, entity: DomEntity) -> ConversionResult:
        """Convert a document or tag to an ``lxml.etree._Element``."""
        start_time = time.perf_counter()
        from lxml import etree

        if entity.is_document:
            tags = list(entity.iter_children(EntityType.TAG))
            if len(tags) != 1:
                return self._create_error_result(
                    f"document must have exactly one top-level tag, found {len(tags)}",
                    entity,
                    start_time,
                )
            entity = tags[0]
        elif not entity.is_tag:
            return self._create_error_result(
                f"cannot convert {entity.type.name.lower()} entity to an element",
                entity,
                start_time,
            )

        element = self._convert_tag(entity, etree)
        return ConversionResult(
            success=True,
            converted_data=element,
            original_data=entity,
            conversion_time_ms=(time.perf_counter() - start_time) * MS_PER_SECOND,
            metadata={
                "lxml_version": etree.LXML_VERSION,
                "element_count": sum(1 for _ in element.iter(tag=etree.Element)),
            },
        )

    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert an ``lxml`` element or element tree to a new document."""
        start_time = time.perf_counter()
        from lxml import etree

        if isinstance(target_data, etree._ElementTree):
            target_data = target_data.getroot()
        if not etree.iselement(target_data) or not isinstance(target_data.tag, str):
            return self._create_error_result(
                "target data is not an lxml element", target_data, start_time
            )

        document = DomEntity.document()
        try:
            self._convert_element(target_data, document, etree)
        except (DomError, ValueError) as e:
            return self._create_error_result(
                f"failed to convert from lxml: {e}", target_data, start_time
            )

        return ConversionResult(
            success=True,
            converted_data=document,
            original_data=target_data,
            conversion_time_ms=(time.perf_counter() - start_time) * MS_PER_SECOND,
            metadata={"tag_count": len(document.find_all_tags())},
        )

    def _convert_tag(self, tag: DomEntity, etree: Any) -> Any:
        root = etree.Element(tag.name)
        pending = [(tag, root)]
        while pending:
            source, element = pending.pop()
            if source.value:
                element.text = source.value
            for child in source.children:
                if child.is_attribute:
                    element.set(child.name, child.value)
                elif child.is_comment:
                    element.append(etree.Comment(f" {child.value} "))
                else:
                    pending.append((child, etree.SubElement(element, child.name)))
        return root

    def _convert_element(self, element: Any, parent: DomEntity, etree: Any) -> None:
        # Child tags are appended on discovery so they keep their place among comments
        pending = [(element, parent.add_tag(etree.QName(element).localname))]
        while pending:
            source, tag = pending.pop()
            for name, value in source.attrib.items():
                tag.add_attribute(etree.QName(name).localname, value)

            text_runs = [source.text or ""]
            for child in source:
                if child.tag is etree.Comment:
                    tag.add_comment((child.text or "").strip())
                elif isinstance(child.tag, str):
                    child_tag = tag.add_tag(etree.QName(child).localname)
                    pending.append((child, child_tag))
                text_runs.append(child.tail or "")
            tag.value = "".join(text_runs).strip()


_ADAPTERS = {"lxml": LxmlAdapter}


def get_adapter(name: str, correlation_id: Optional[str] = None) -> Optional[IntegrationAdapter]:
    """Instantiate the adapter registered under ``name``, if any."""
    adapter_class = _ADAPTERS.get(name)
    if adapter_class is None:
        return None
    return adapter_class(correlation_id)


def list_adapters() -> List[str]:
    """Names of all registered adapters."""
    return sorted(_ADAPTERS)
