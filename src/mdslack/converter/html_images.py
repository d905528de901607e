"""Pull ``<img>`` tags out of raw HTML fragments.

Slack cannot render HTML, but Markdown documents often embed images as
``<img src="…" alt="…">``.  Those become image blocks; every other tag in
the fragment is ignored.
"""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from mdslack.converter.blocks import image
from mdslack.models import ConversionWarning
from mdslack.observability import get_logger

log = get_logger("converter")


def extract_images(
    html: str,
    warnings: list[ConversionWarning] | None = None,
) -> list[dict]:
    """Return one image block per ``<img>`` tag with a ``src`` in *html*.

    ``alt`` falls back to the URL when missing or empty; a ``title``
    attribute is passed through.  Markup the parser rejects yields no
    blocks and, when *warnings* is given, an ``HTML_PARSE_FAILED`` warning.
    """
    if "<img" not in html.lower():
        return []

    try:
        soup = BeautifulSoup(html, "html.parser")
    except ParserRejectedMarkup as exc:
        log.warning(
            "Raw HTML could not be parsed",
            extra={"extra_fields": {"op": "extract_images", "error": str(exc)}},
        )
        if warnings is not None:
            warnings.append(ConversionWarning(
                code="HTML_PARSE_FAILED",
                message=f"Raw HTML could not be parsed: {exc}",
                context={"raw": html[:200]},
            ))
        return []

    blocks: list[dict] = []
    for tag in soup.find_all("img"):
        src = tag.get("src")
        if not isinstance(src, str) or not src:
            continue
        alt = tag.get("alt")
        title = tag.get("title")
        blocks.append(image(
            src,
            alt if isinstance(alt, str) and alt else src,
            title if isinstance(title, str) else None,
        ))
    return blocks
