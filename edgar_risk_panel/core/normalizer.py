"""
HTML → text normalization

Turns an EDGAR primary document into plain text that keeps paragraph
boundaries, which the section extractor relies on. BeautifulSoup (lxml)
does the parsing; inline XBRL metadata is dropped before the text is taken.
"""
import html
import re

from bs4 import BeautifulSoup, Comment

BLOCK_TAGS = ["p", "div", "tr", "li", "h1", "h2", "h3", "h4", "h5", "h6", "table", "section", "article"]

# Every whitespace character except the newline
HORIZONTAL_WS = re.compile(r"[^\S\n]+")
EXCESS_NEWLINES = re.compile(r"\n{3,}")


def _decode_entities(text: str) -> str:
    # Repeat so "&amp;lt;" ends up as "<" rather than "&lt;"
    while True:
        decoded = html.unescape(text)
        if decoded == text:
            return decoded
        text = decoded


def _strip_markup(text: str) -> str:
    soup = BeautifulSoup(text, "lxml")

    for tag in soup(["script", "style"]):
        tag.decompose()
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    # XBRL/iXBRL tags carry a namespace prefix (ix:, us-gaap:, ...) and hold
    # hidden facts, not narrative
    for tag in soup.find_all(lambda t: ":" in t.name):
        if not tag.decomposed:
            tag.decompose()

    # Structural breaks must go in before the tags disappear
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for tag in soup.find_all(BLOCK_TAGS):
        tag.append("\n\n")

    return soup.get_text(" ")


def normalize(markup: str | bytes) -> str:
    """
    Convert filing markup to normalized plain text.

    Never raises; blank input gives "". The output is a fixed point:
    normalize(normalize(x)) == normalize(x).
    """
    if isinstance(markup, (bytes, bytearray)):
        markup = bytes(markup).decode("utf-8", errors="replace")
    if not markup or markup.isspace():
        return ""

    # Decoding first turns escaped markup (&lt;p&gt;) into tags the parser drops
    text = _strip_markup(_decode_entities(markup))
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    text = HORIZONTAL_WS.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))

    text = EXCESS_NEWLINES.sub("\n\n", text)
    return text.strip()
