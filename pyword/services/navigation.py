"""
Node id scheme shared by the tree and content views.

Root children are the fixed categories. Items under a listable category are
`<first letter of category><1-based index>` (p1, t2, i1, s3). Ids are flat and
stable across refreshes; anything that does not parse is "no such node".
"""

from __future__ import annotations

from pyword.domain.interfaces import IBestEffortProjection

ROOT = ""

CATEGORIES: tuple[str, ...] = ("title", "paragraphs", "tables", "images", "styles", "metadata")

# Categories that list items, keyed by their id prefix.
ITEM_PREFIXES: dict[str, str] = {
    "p": "paragraphs",
    "t": "tables",
    "i": "images",
    "s": "styles",
}

CATEGORY_LABELS: dict[str, str] = {
    "paragraphs": "Paragraphs",
    "tables": "Tables",
    "images": "Images",
    "styles": "Styles",
}

NO_DOCUMENT = "No document"
INVALID_NODE = "Select a valid node to view its content."


def item_id(category: str, index: int) -> str:
    """0-based index -> node id."""
    return f"{category[0]}{index + 1}"


def parse_item_id(node_id: str) -> tuple[str, int] | None:
    """Node id -> (category, 0-based index), or None when the id names no item."""
    if not node_id or node_id in CATEGORIES:
        return None
    category = ITEM_PREFIXES.get(node_id[0])
    digits = node_id[1:]
    if category is None or not digits.isascii() or not digits.isdigit():
        return None
    index = int(digits) - 1
    if index < 0:
        return None
    return category, index


def _count(category: str, adapter: IBestEffortProjection) -> int:
    if category == "paragraphs":
        return adapter.get_paragraph_count()
    if category == "tables":
        return adapter.get_table_count()
    if category == "images":
        return adapter.get_image_count()
    if category == "styles":
        return adapter.get_style_count()
    return 0


def _item_text(category: str, index: int, adapter: IBestEffortProjection) -> str:
    if category == "paragraphs":
        return adapter.get_paragraph_text(index)
    if category == "tables":
        return adapter.get_table_info(index)
    if category == "images":
        return adapter.get_image_info(index)
    return adapter.get_style_info(index)


def child_ids(node_id: str, adapter: IBestEffortProjection | None) -> list[str]:
    if adapter is None:
        return []
    if node_id == ROOT:
        return list(CATEGORIES)
    if node_id not in CATEGORY_LABELS:
        return []
    return [item_id(node_id, i) for i in range(_count(node_id, adapter))]


def has_children(node_id: str, adapter: IBestEffortProjection | None) -> bool:
    return bool(child_ids(node_id, adapter))


def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def node_label(node_id: str, adapter: IBestEffortProjection | None) -> str:
    if adapter is None:
        return NO_DOCUMENT
    if node_id == "title":
        return adapter.get_title()
    if node_id in CATEGORY_LABELS:
        return f"{CATEGORY_LABELS[node_id]} ({_count(node_id, adapter)})"
    if node_id == "metadata":
        return "Metadata"

    parsed = parse_item_id(node_id)
    if parsed is None:
        return node_id
    category, index = parsed
    if category == "paragraphs":
        return truncate(adapter.get_paragraph_text(index), 30)
    singular = CATEGORY_LABELS[category][:-1]
    return f"{singular} {index + 1}"


def node_content(node_id: str, adapter: IBestEffortProjection | None) -> str:
    """Plain text for the content pane when `node_id` is selected."""
    if adapter is None:
        return "No document is open."

    if node_id == "title":
        return f"Document title\n\n{adapter.get_title()}"

    if node_id in CATEGORY_LABELS:
        heading = CATEGORY_LABELS[node_id]
        count = _count(node_id, adapter)
        if count == 0:
            return f"{heading}\n\nNo {heading.lower()}"
        lines = [
            f"{heading[:-1]} {i + 1}: {truncate(_item_text(node_id, i, adapter), 50)}"
            for i in range(count)
        ]
        return heading + "\n\n" + "\n".join(lines)

    if node_id == "metadata":
        meta = adapter.get_metadata_info()
        lines = [f"{k}: {v}" for k, v in meta.items()]
        return "Document metadata\n\n" + "\n".join(lines)

    parsed = parse_item_id(node_id)
    if parsed is None:
        return INVALID_NODE
    category, index = parsed
    heading = f"{CATEGORY_LABELS[category][:-1]} {index + 1} details"
    return f"{heading}\n\n{_item_text(category, index, adapter)}"
