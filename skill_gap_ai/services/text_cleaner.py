"""Clean and normalize document text (résumés, job postings) for LLM extraction."""

import re
import unicodedata
from typing import List

from skill_gap_ai.config import MAX_CHUNK_CHARS


def clean_document_text(raw_text: str) -> str:
    """
    Clean pasted or scraped document text into readable plain text.
    Strips HTML markup if present, control characters and excess whitespace.
    """
    if not raw_text or not raw_text.strip():
        return ""

    text = unicodedata.normalize("NFC", raw_text)

    if re.search(r"<[a-zA-Z/][^>]*>", text):
        text = re.sub(r"<script[^>]*>[\s\S]*?</script>", " ", text, flags=re.IGNORECASE)
        text = re.sub(r"<style[^>]*>[\s\S]*?</style>", " ", text, flags=re.IGNORECASE)
        # Block elements become newlines to keep section structure
        for tag in ("br", "p", "div", "li", "tr", "h1", "h2", "h3", "h4"):
            text = re.sub(rf"</?{tag}\b[^>]*>", "\n", text, flags=re.IGNORECASE)
        text = re.sub(r"<[^>]+>", " ", text)
        text = text.replace("&nbsp;", " ")
        text = text.replace("&lt;", "<")
        text = text.replace("&gt;", ">")
        text = text.replace("&quot;", '"')
        text = text.replace("&amp;", "&")

    # Drop control characters except newline and tab
    text = "".join(ch for ch in text if ch in "\n\t" or unicodedata.category(ch) != "Cc")
    text = text.replace("•", "-")

    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _hard_split(text: str, max_chars: int) -> List[str]:
    """Split an oversized paragraph on line, then sentence, then word boundaries."""
    pieces: List[str] = []
    rest = text
    while len(rest) > max_chars:
        window = rest[:max_chars]
        cut = max(window.rfind("\n"), window.rfind(". "), window.rfind(" "))
        if cut <= 0:
            cut = max_chars - 1
        pieces.append(rest[: cut + 1].strip())
        rest = rest[cut + 1:]
    if rest.strip():
        pieces.append(rest.strip())
    return [p for p in pieces if p]


def split_into_chunks(text: str, max_chars: int = MAX_CHUNK_CHARS) -> List[str]:
    """
    Split text into chunks of at most max_chars, preferring paragraph boundaries.
    Text that already fits is returned as a single chunk.
    """
    text = (text or "").strip()
    if not text:
        return []
    if max_chars <= 0 or len(text) <= max_chars:
        return [text]

    chunks: List[str] = []
    current = ""
    for paragraph in re.split(r"\n\s*\n", text):
        paragraph = paragraph.strip()
        if not paragraph:
            continue
        if len(paragraph) > max_chars:
            if current:
                chunks.append(current)
                current = ""
            chunks.extend(_hard_split(paragraph, max_chars))
            continue
        candidate = f"{current}\n\n{paragraph}" if current else paragraph
        if len(candidate) > max_chars:
            chunks.append(current)
            current = paragraph
        else:
            current = candidate
    if current:
        chunks.append(current)
    return chunks
