from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

PRINT_STYLE_ID = "print-overrides"

PRINT_CSS = """
@media print {
  *, *::before, *::after {
    color: black !important;
    background-color: white !important;
    box-shadow: none !important;
    text-shadow: none !important;
  }
  @page {
    size: A4;
    margin: 1cm;
  }
  body {
    -webkit-print-color-adjust: exact;
    print-color-adjust: exact;
  }
  .print-hide {
    display: none !important;
  }
  .print-break-avoid {
    break-inside: avoid;
  }
  .container {
    max-width: none !important;
    padding: 0 !important;
  }
  .print-section-break {
    break-before: always;
  }
  .avatar {
    height: 4rem;
    width: 4rem;
    top: -2rem;
  }
  .hero {
    height: 4rem;
    background: none !important;
  }
  .card {
    border: 1px solid #d1d5db !important;
  }
  a:hover {
    color: #2563eb !important;
  }
}
""".strip()


@dataclass(frozen=True)
class StyleBlock:
    key: int
    element_id: str
    css: str
    media: Optional[str] = None


class DocumentHead:
    """Stilblock som renderas in i <head> på varje sida."""

    def __init__(self) -> None:
        self._blocks: Dict[int, StyleBlock] = {}
        self._keys = itertools.count(1)

    def insert(self, element_id: str, css: str, media: str | None = None) -> StyleBlock:
        block = StyleBlock(key=next(self._keys), element_id=element_id, css=css, media=media)
        self._blocks[block.key] = block
        return block

    def remove(self, block: StyleBlock) -> bool:
        return self._blocks.pop(block.key, None) is not None

    def contains(self, block: StyleBlock) -> bool:
        return block.key in self._blocks

    @property
    def styles(self) -> List[StyleBlock]:
        return list(self._blocks.values())

    def count(self, element_id: str) -> int:
        return sum(1 for block in self._blocks.values() if block.element_id == element_id)


class ReleaseHandle:
    """Tar bort exakt det block som aktiverades. Andra anropet gör ingenting."""

    def __init__(self, injector: "PrintStyleInjector", block: StyleBlock) -> None:
        self._injector = injector
        self._block = block
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._injector._drop(self._block)

    def __enter__(self) -> "ReleaseHandle":
        return self

    def __exit__(self, *exc_info) -> None:
        self.release()


class PrintStyleInjector:
    """Installerar utskriftsstilen i dokumentets head och tar bort den igen."""

    def __init__(self, head: DocumentHead, css: str = PRINT_CSS) -> None:
        self._head = head
        self._css = css
        self._block: Optional[StyleBlock] = None
        self._handles = 0

    @property
    def active(self) -> bool:
        return self._block is not None and self._head.contains(self._block)

    def activate(self) -> ReleaseHandle:
        if self._block is None:
            self._block = self._head.insert(PRINT_STYLE_ID, self._css)
            logger.debug("Print style block %s installed", self._block.key)
        self._handles += 1
        return ReleaseHandle(self, self._block)

    def _drop(self, block: StyleBlock) -> None:
        if block is not self._block:
            return
        self._handles -= 1
        if self._handles > 0:
            return
        self._head.remove(block)
        self._block = None
        logger.debug("Print style block %s removed", block.key)


# Delade instanser som appens livscykel kopplar på och av
document_head = DocumentHead()
print_style_injector = PrintStyleInjector(document_head)

__all__ = [
    "DocumentHead",
    "PRINT_CSS",
    "PRINT_STYLE_ID",
    "PrintStyleInjector",
    "ReleaseHandle",
    "StyleBlock",
    "document_head",
    "print_style_injector",
]
