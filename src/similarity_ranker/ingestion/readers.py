"""Per-format content readers and the extension → reader registry.

Every reader honours the same contract: take a path, return the semantic
content of that one file as an ordered list of strings.  Readers may
raise anything their parser raises; the scanner is the layer that turns
a failing file into a non-fatal diagnostic.
"""

from __future__ import annotations

import copy
import csv
import io
import json
import logging
import re
from pathlib import Path
from typing import Any, Callable

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from similarity_ranker.config import settings
from similarity_ranker.exceptions import UnreadableFileError, UnsupportedFormatError

logger = logging.getLogger(__name__)

Reader = Callable[[Path], list[str]]

_LINE_BREAK = re.compile(r"\r?\n")


# ---------------------------------------------------------------------------
# Leaf readers
# ---------------------------------------------------------------------------


def _read_source(path: str | Path) -> str:
    try:
        return Path(path).read_text(encoding=settings.file_encoding)
    except UnicodeDecodeError as exc:
        raise UnreadableFileError(f"{path} is not valid {settings.file_encoding}: {exc.reason}") from exc


def read_text(path: str | Path) -> list[str]:
    """Read a plain-text file and split it into lines."""
    return _read_source(path).splitlines()


def read_csv(path: str | Path) -> list[str]:
    """Read a CSV file, one descriptive string per row.

    Empty columns are dropped after stripping; the remaining columns are
    joined with a single space.  Rows left with nothing are omitted.
    """
    rows: list[str] = []
    for record in csv.reader(io.StringIO(_read_source(path), newline="")):
        row_text = " ".join(col.strip() for col in record if col.strip())
        if row_text:
            rows.append(row_text)
    return rows


def read_json(path: str | Path) -> list[str]:
    """Read a JSON file and collect every string value in document order."""
    root = json.loads(_read_source(path))
    values: list[str] = []
    _collect_strings(root, values)
    return values


def _collect_strings(node: Any, collector: list[str]) -> None:
    if isinstance(node, str):
        collector.append(node)
    elif isinstance(node, dict):
        for child in node.values():
            _collect_strings(child, collector)
    elif isinstance(node, list):
        for child in node:
            _collect_strings(child, collector)


_markdown = MarkdownIt("commonmark")

# Nodes whose own content is the visible text.
_LITERAL_NODES = {"text", "text_special", "code_inline", "fence", "code_block"}


def read_markdown(path: str | Path) -> list[str]:
    """Render a Markdown file to plain text with link and image targets removed.

    The rendered document is returned as a single string; an empty
    document yields an empty list.
    """
    tree = SyntaxTreeNode(_markdown.parse(_read_source(path)))
    rendered = _plain_text(scrub_destinations(tree))
    text = "\n".join(line.strip() for line in rendered.splitlines() if line.strip())
    return [text] if text else []


def scrub_destinations(tree: SyntaxTreeNode) -> SyntaxTreeNode:
    """Return a copy of *tree* whose links and images point nowhere.

    ``link`` nodes get an empty ``href`` and ``image`` nodes an empty
    ``src``; their child text (link label, image alt) is kept.  The input
    tree is left untouched.
    """
    scrubbed = SyntaxTreeNode(copy.deepcopy(tree.to_tokens()))
    for node in scrubbed.walk():
        if node.type == "link":
            node.nester_tokens.opening.attrSet("href", "")
        elif node.type == "image":
            node.token.attrSet("src", "")
    return scrubbed


def _plain_text(node: SyntaxTreeNode) -> str:
    if node.type in _LITERAL_NODES:
        return node.content
    if node.type in ("softbreak", "hardbreak"):
        return "\n"
    if node.type in ("html_inline", "html_block"):
        return ""
    text = "".join(_plain_text(child) for child in node.children)
    if node.type not in ("root", "inline") and node.block:
        text += "\n"
    return text


def read_pdf(path: str | Path) -> list[str]:
    """Extract the full text of a PDF and split it into lines."""
    from langchain_community.document_loaders import PyPDFLoader

    pages = PyPDFLoader(str(path)).load()
    text = "\n".join(page.page_content for page in pages)
    return _LINE_BREAK.split(text)


def read_docx(path: str | Path) -> list[str]:
    """Read a Word document, one string per paragraph."""
    import docx

    document = docx.Document(str(path))
    return [paragraph.text for paragraph in document.paragraphs]


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


class ReaderRegistry:
    """Extension-keyed table of readers.

    Extensions are matched case-insensitively and include the leading dot
    (``".csv"``).  Adding a format means registering one more reader; the
    dispatch logic itself never changes.
    """

    def __init__(self, readers: dict[str, Reader] | None = None) -> None:
        self._readers: dict[str, Reader] = {}
        for extension, reader in (readers or {}).items():
            self.register(extension, reader)

    def register(self, extension: str, reader: Reader) -> None:
        """Add *reader* for *extension*, replacing any existing entry."""
        ext = extension.lower()
        if not ext.startswith("."):
            ext = f".{ext}"
        self._readers[ext] = reader

    def reader_for(self, path: str | Path) -> Reader | None:
        """Return the reader for *path*'s extension, or ``None``."""
        return self._readers.get(Path(path).suffix.lower())

    def supports(self, path: str | Path) -> bool:
        return self.reader_for(path) is not None

    @property
    def extensions(self) -> list[str]:
        return sorted(self._readers)

    def read(self, path: str | Path) -> list[str]:
        """Dispatch *path* to its reader.

        Raises
        ------
        UnsupportedFormatError
            If no reader is registered for the extension.
        """
        reader = self.reader_for(path)
        if reader is None:
            raise UnsupportedFormatError(str(path), Path(path).suffix.lower())
        logger.debug("Reading %s with %s", path, getattr(reader, "__name__", reader))
        return list(reader(Path(path)))


def default_registry() -> ReaderRegistry:
    """Return a fresh registry covering text, CSV, JSON, Markdown, PDF and Word."""
    return ReaderRegistry(
        {
            ".txt": read_text,
            ".text": read_text,
            ".log": read_text,
            ".csv": read_csv,
            ".json": read_json,
            ".md": read_markdown,
            ".markdown": read_markdown,
            ".pdf": read_pdf,
            ".docx": read_docx,
        }
    )
