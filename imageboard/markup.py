"""
Post text rendering.

Raw user text goes through a fixed pipeline:
escape -> greentext lines -> URL links -> citation links.
Every later step matches the escaped form produced by the first one, so the
order of the steps must not change.
"""

import html
import re

GREENTEXT_MARKER = '&gt;'
CITATION_MARKER = '&gt;&gt;'
LINE_BREAK = '<br>'

# '<' and '>' never survive escaping and '"' is left out of the class, so a match stops at our own tags and at a closing quote
_URL_RE = re.compile(r"https?://[a-zA-Z0-9$%&'()*+,\-./:;=?@\[\]\\^_!#]+")
_CITATION_RE = re.compile(r'&gt;&gt;(\d+)')
_ANCHOR_RE = re.compile(r'(<a href="[^"]*">.*?</a>)')


def _quote_lines(text: str) -> str:
    lines = []
    # only \n and \r\n break lines; a trailing break does not open an empty last line
    raw_lines = re.split(r'\r?\n', text)
    if len(raw_lines) > 1 and raw_lines[-1] == '':
        raw_lines.pop()
    for line in raw_lines:
        if line.startswith(GREENTEXT_MARKER) and not line.startswith(CITATION_MARKER):
            line = f'<span>{line}</span>'
        lines.append(line)
    return LINE_BREAK.join(lines)


def _link_urls(text: str) -> str:
    return _URL_RE.sub(lambda m: f'<a href="{m.group(0)}">{m.group(0)}</a>', text)


def _link_citations(text: str) -> str:
    # citations inside an existing link (e.g. part of a URL) stay untouched
    parts = _ANCHOR_RE.split(text)
    for i in range(0, len(parts), 2):
        parts[i] = _CITATION_RE.sub(lambda m: f'<a href="#p{m.group(1)}">{m.group(0)}</a>', parts[i])
    return ''.join(parts)


def render_comment(text: str) -> str:
    """Render raw comment text into the markup stored with the post."""
    text = html.escape(text, quote=False)
    text = _quote_lines(text)
    text = _link_urls(text)
    return _link_citations(text)


def render_subject(text: str) -> str:
    return f'<b>{render_comment(text)}</b>'
