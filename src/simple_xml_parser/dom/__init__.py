"""Document object model for the simplified XML dialect.

Key Components:
    DomEntity: Document, tag, attribute or comment node with navigation
    EntityType: Enumeration of entity kinds
    DomBuilder: Event consumer that constructs a DomEntity tree
    XMLSerializer: Renders a DomEntity subtree back to text
"""

from .builder import DomBuilder
from .entity import DomEntity, EntityType
from .serializer import XML_DECLARATION, XMLSerializer, serialize

__all__ = [
    "DomBuilder",
    "DomEntity",
    "EntityType",
    "XML_DECLARATION",
    "XMLSerializer",
    "serialize",
]
