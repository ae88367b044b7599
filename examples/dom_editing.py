#!/usr/bin/env python3
"""
DOM editing example for the Simple XML Parser.

Parses a document, locates a tag by navigation, appends new content and
prints the subtree before and after the change.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from simple_xml_parser import parse_file
from simple_xml_parser.shared import SerializerConfig


def main():
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).parent / "sample.xml"
    result = parse_file(path)
    if not result.success:
        print(f"❌ {path}: {result.error}", file=sys.stderr)
        return 1

    document = result.document
    root = document.first_child_tag("root")
    correspondence = root.first_child_tag("correspondence")
    pretty = SerializerConfig(include_declaration=False, indent=2)

    print("=" * 60)
    print(correspondence.to_xml(pretty))

    letter = correspondence.first_child_tag("letter")
    while letter is not None:
        print(f"📄 letter to {letter.get_attribute('to')}: {letter.value}")
        letter = correspondence.next_child_tag(letter, "letter")

    new_tag = correspondence.add_tag("newtag")
    new_tag.add_attribute("attrib0", "value0")
    new_tag.add_attribute("attrib1", "value1")
    new_tag.value = "newtag value"

    print("=" * 60)
    print(correspondence.to_xml(pretty))
    return 0


if __name__ == "__main__":
    sys.exit(main())
