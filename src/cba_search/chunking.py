from __future__ import annotations

import re

from .schema import Document, Section

_HEADING_LINE = re.compile(r"^(#{1,3}[ \t]+\S.*)$", re.MULTILINE)
_HEADING_MARKER = re.compile(r"^#{1,3}[ \t]+")
_FRONT_MATTER = re.compile(r"\A---\n.*?\n---\n*", re.DOTALL)
_GUIDE_HEADING = re.compile(r"^#{1,2} (.+)")


def split_sections(document: Document) -> list[Section]:
    """Split a document into heading-delimited sections.

    Heading lines carry one to three `#` markers. Text ahead of the first
    heading is attributed to the document title; whitespace-only spans are
    dropped.

    Args:
        document: Corpus document to segment.

    Returns:
        Sections in document order.
    """
    sections: list[Section] = []
    current_heading = document.title
    current_text = ""

    # re.split with a capturing group puts heading lines at odd indexes.
    for index, part in enumerate(_HEADING_LINE.split(document.content)):
        if index % 2:
            if current_text.strip():
                sections.append(Section(heading=current_heading, text=current_text.strip()))
            current_heading = _HEADING_MARKER.sub("", part).strip()
            current_text = ""
        else:
            current_text += part

    if current_text.strip():
        sections.append(Section(heading=current_heading, text=current_text.strip()))
    return sections


def split_markdown_documents(
    markdown_text: str,
    id_prefix: str = "guide",
    min_chars: int = 50,
) -> list[Document]:
    """Turn a plain-English markdown guide into Guide-tier documents.

    Level-1 and level-2 headings start a new document; deeper headings stay in
    the body so `split_sections` can still segment them later.

    Args:
        markdown_text: Guide source, optionally with YAML front matter.
        id_prefix: Prefix for generated document ids.
        min_chars: Bodies this short or shorter are skipped.

    Returns:
        Documents with ids `<prefix>-0`, `<prefix>-1`, ... in source order.
    """
    documents: list[Document] = []
    current_title = "Introduction"
    current_lines: list[str] = []

    def _commit(title: str, lines: list[str]) -> None:
        content = "\n".join(lines).strip()
        if len(content) <= min_chars:
            return
        documents.append(Document(id=f"{id_prefix}-{len(documents)}", title=title, content=content))

    for line in _FRONT_MATTER.sub("", markdown_text).splitlines():
        match = _GUIDE_HEADING.match(line)
        if match:
            _commit(current_title, current_lines)
            current_title = match.group(1).strip()
            current_lines = []
            continue
        current_lines.append(line)

    _commit(current_title, current_lines)
    return documents
