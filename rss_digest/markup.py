from __future__ import annotations

import re
from typing import Optional

_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&apos;": "'",
}

_ENTITY_RE = re.compile(r"&[#\w]+;")
_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")
_CDATA_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.S)


def _open_tag(tag: str) -> str:
    # attributes allowed, self-closing forms (<link/>) are not an opening tag
    return rf"<{re.escape(tag)}(?:\s[^>]*?)?(?<!/)>"


def decode_entities(text: str) -> str:
    """Replace the handful of entities RSS publishers escape; leave the rest as-is."""
    return _ENTITY_RE.sub(lambda m: _ENTITIES.get(m.group(0), m.group(0)), text)


def clean_html(html: str) -> str:
    """Strip tags, turn &nbsp; into spaces and collapse whitespace."""
    text = _TAG_RE.sub("", html)
    text = text.replace("&nbsp;", " ")
    return _WS_RE.sub(" ", text).strip()


def extract_tag(fragment: str, tag: str) -> Optional[str]:
    """
    Return the text of the first `<tag>` element in `fragment`, or None.

    Plain content is entity-decoded. CDATA content is returned verbatim since
    it is already literal text.
    """
    name = re.escape(tag)
    direct = re.search(
        rf"{_open_tag(tag)}(.*?)</{name}\s*>", fragment, re.I | re.S
    )
    if direct:
        inner = direct.group(1).strip()
        wrapped = _CDATA_RE.fullmatch(inner)
        if wrapped:
            if wrapped.group(1).strip():
                return wrapped.group(1).strip()
        elif inner:
            return decode_entities(inner)

    cdata = re.search(
        rf"{_open_tag(tag)}\s*<!\[CDATA\[(.*?)\]\]>\s*</{name}\s*>",
        fragment,
        re.I | re.S,
    )
    if cdata and cdata.group(1).strip():
        return cdata.group(1).strip()
    return None
