"""Turn indented lines into a forest of line nodes."""

from dataclasses import dataclass, field


TAB_WIDTH = 4


@dataclass
class LineNode:
    raw: str  # line content, trimmed but not metadata-stripped
    indent: int
    line_number: int
    children: list["LineNode"] = field(default_factory=list)


def get_indent(line: str, tab_width: int = TAB_WIDTH) -> int:
    """Width of the leading whitespace, counting a tab as `tab_width` columns."""
    width = 0
    for ch in line:
        if ch == "\t":
            width += tab_width
        elif ch.isspace():
            width += 1
        else:
            break
    return width


def build_forest(text: str, tab_width: int = TAB_WIDTH) -> list[LineNode]:
    """
    Build a forest from indented text. Blank lines are ignored.

    A line becomes a child of the nearest preceding line with strictly smaller
    indentation; lines at equal indentation are siblings. Lines with no such
    ancestor become roots, so several top-level families are allowed.
    """
    roots: list[LineNode] = []
    stack: list[LineNode] = []

    for line_number, line in enumerate(text.splitlines(), start=1):
        raw = line.strip()
        if not raw:
            continue

        node = LineNode(raw=raw, indent=get_indent(line, tab_width), line_number=line_number)

        while stack and stack[-1].indent >= node.indent:
            stack.pop()

        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)
        stack.append(node)

    return roots
