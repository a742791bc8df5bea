"""Plain-text helpers for Lexical rich-text values coming out of the CMS."""
import re
from typing import Any, List, Mapping, Optional, Union

RichTextContent = Optional[Union[str, Mapping[str, Any]]]

_WHITESPACE = re.compile(r"\s+")


def _extract(nodes: List[Any]) -> str:
    parts = []
    for node in nodes:
        if not isinstance(node, Mapping):
            continue
        if node.get("text"):
            parts.append(node["text"])
        elif isinstance(node.get("children"), list):
            parts.append(_extract(node["children"]))
        else:
            parts.append("")
    return _WHITESPACE.sub(" ", " ".join(parts)).strip()


def extract_text_from_rich_text(content: RichTextContent) -> str:
    """Flatten a Lexical tree (or plain string) to a single line of text."""
    if not content:
        return ""
    if isinstance(content, str):
        return content
    root = content.get("root") if isinstance(content, Mapping) else None
    if not isinstance(root, Mapping) or not isinstance(root.get("children"), list):
        return ""
    return _extract(root["children"])


def has_rich_text_content(content: RichTextContent) -> bool:
    return len(extract_text_from_rich_text(content)) > 0


def truncate_rich_text(content: RichTextContent, max_length: int = 150) -> str:
    text = extract_text_from_rich_text(content)
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."
