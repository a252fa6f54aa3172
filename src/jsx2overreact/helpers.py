import re
from typing import Optional

_ESCAPE_RE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|[0-7]{1,3}|\r\n|.)",
    re.DOTALL,
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}
_QUOTE_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "$": "\\$",
}
# line breaks are kept in plain text
_TEXT_ESCAPES = {ch: _QUOTE_ESCAPES[ch] for ch in ("\\", "'", "$")}
_UNESCAPED_QUOTE_RE = re.compile(r"(?<!\\)((?:\\\\)*)'")


def get_node_text(node) -> str:
    """
    Get text of the tree sitter node
    """
    if not node or not node.text:
        return ""

    return node.text.decode("utf-8")


def _decode_escape(match: re.Match) -> str:
    seq = match.group(1)
    if seq in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[seq]
    if seq.startswith("u{"):
        return chr(int(seq[2:-1], 16))
    if seq[0] in "ux" and len(seq) > 1:
        return chr(int(seq[1:], 16))
    if seq[0] in "01234567":
        # "\0" is the only octal escape allowed in modern code, keep legacy ones working
        return chr(int(seq, 8))
    if seq in ("\n", "\r\n", "\r", "\u2028", "\u2029"):
        return ""  # line continuation
    return seq


def decode_string_literal(raw: str) -> str:
    """
    Return the value of a JavaScript string literal given its source text,
    including the surrounding quotes.
    """
    return _ESCAPE_RE.sub(_decode_escape, raw[1:-1])


def quote(value: str) -> str:
    """Render *value* as a single-quoted string literal."""
    return "'" + "".join(_QUOTE_ESCAPES.get(ch, ch) for ch in value) + "'"


def quote_text(value: str) -> str:
    """Wrap plain text in single quotes, keeping its whitespace as written."""
    return "'" + "".join(_TEXT_ESCAPES.get(ch, ch) for ch in value) + "'"


def escape_template_chunk(raw: str) -> str:
    """
    Escape bare single quotes in raw template text so that it can be placed
    inside a single-quoted string. Existing escape sequences are kept.
    """
    return _UNESCAPED_QUOTE_RE.sub(lambda m: m.group(1) + "\\'", raw.replace("\n", "\\n"))


def normalize_jsx_text(value: str) -> str:
    """
    Collapse JSX text the way JSX compilers do: every line is trimmed, blank
    lines are dropped and the remaining lines are joined with a single space.
    """
    return " ".join(line.strip() for line in value.splitlines() if line.strip())


def starts_with_capital(word: Optional[str]) -> bool:
    if not word:
        return False
    return word[0].isupper()


def parse_number(raw: str):
    """Best-effort numeric value of a JavaScript number literal."""
    text = raw.replace("_", "")
    try:
        if text[:2].lower() in ("0x", "0o", "0b"):
            return int(text, 0)
        if text.isdigit():
            return int(text)
        return float(text)
    except ValueError:
        return None
