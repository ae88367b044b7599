#!/usr/bin/env python3
"""
Event listing example for the Simple XML Parser.

Streams the parse events of a document to plain callback functions that share
one user context, printing an indented outline.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from simple_xml_parser import CallbackHandler, parse


def begin_tag(state, name):
    print(f"{'  ' * state['scope']}BEGIN TAG: {name}")
    state["scope"] += 1
    state["tags"] += 1


def end_tag(state, name):
    state["scope"] -= 1
    print(f"{'  ' * state['scope']}END TAG: {name}")


def text(state, value):
    print(f"{'  ' * state['scope']}TEXT: {value}")


def comment(state, value):
    print(f"{'  ' * state['scope']}COMMENT: {value}")


def attribute(state, name, value):
    print(f"{'  ' * state['scope']}ATTRIBUTE: {name}={value}")


def main():
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).parent / "sample.xml"
    state = {"scope": 0, "tags": 0}
    handler = CallbackHandler(state, begin_tag, end_tag, text, comment, attribute)

    result = parse(path.read_text(encoding="utf-8"), handler)
    if not result.success:
        print(f"❌ {path}: {result.error}", file=sys.stderr)
        return 1

    print(f"\n✅ {state['tags']} tags, {result.performance.events_emitted} events "
          f"in {result.processing_time_ms:.2f}ms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
