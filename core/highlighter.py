"""
Lightweight Python syntax highlighter.

Hand-rolled tokenizer that splits each line into keyword, builtin, string,
number, comment and plain tokens and renders them as HTML spans. The text is
reproduced exactly: stripping the spans and unescaping gives back the input.
"""

import html
from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    """Token category; the value doubles as the CSS class."""

    KEYWORD = "keyword"
    BUILTIN = "builtin"
    STRING = "string"
    NUMBER = "number"
    COMMENT = "comment"
    PLAIN = "plain"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str


KEYWORDS = frozenset({
    "def", "class", "if", "elif", "else", "for", "while", "return",
    "import", "from", "as", "try", "except", "finally", "with", "in",
    "is", "not", "and", "or", "break", "continue", "pass", "lambda", "yield",
})

BUILTINS = frozenset({
    "print", "len", "range", "str", "int", "float", "list", "dict", "set",
    "tuple", "enumerate", "zip", "map", "filter", "sorted", "sum", "max",
    "min", "abs", "open",
})

COMMENT_MARKER = "#"
QUOTES = ("'", '"')


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_ident_char(ch: str) -> bool:
    return _is_ident_start(ch) or _is_digit(ch)


def _scan_string(text: str, start: int) -> int:
    """Return the index just past the string literal opening at ``start``."""
    quote = text[start]
    j = start + 1
    while j < len(text) and text[j] != quote:
        if text[j] == "\\":
            j += 1
        j += 1
    return min(j + 1, len(text))


def _tokenize_code(code: str) -> list[Token]:
    tokens: list[Token] = []
    i = 0
    while i < len(code):
        ch = code[i]

        if ch.isspace():
            tokens.append(Token(TokenKind.PLAIN, ch))
            i += 1
        elif ch in QUOTES:
            j = _scan_string(code, i)
            tokens.append(Token(TokenKind.STRING, code[i:j]))
            i = j
        elif _is_digit(ch):
            j = i
            while j < len(code) and (_is_digit(code[j]) or code[j] == "."):
                j += 1
            tokens.append(Token(TokenKind.NUMBER, code[i:j]))
            i = j
        elif _is_ident_start(ch):
            j = i
            while j < len(code) and _is_ident_char(code[j]):
                j += 1
            word = code[i:j]
            if word in KEYWORDS:
                kind = TokenKind.KEYWORD
            elif word in BUILTINS:
                kind = TokenKind.BUILTIN
            else:
                kind = TokenKind.PLAIN
            tokens.append(Token(kind, word))
            i = j
        else:
            tokens.append(Token(TokenKind.PLAIN, ch))
            i += 1

    return tokens


def tokenize_line(line: str) -> list[Token]:
    """
    Split a single line into tokens.

    The comment split is a plain first-occurrence search for ``#``; a marker
    inside a string literal still starts the comment.
    """
    if not line.strip():
        # Whitespace-only lines keep their whitespace so markup strips back to the input.
        return [Token(TokenKind.PLAIN, line)] if line else []

    if line.strip().startswith(COMMENT_MARKER):
        return [Token(TokenKind.COMMENT, line)]

    comment_index = line.find(COMMENT_MARKER)
    if comment_index < 0:
        return _tokenize_code(line)

    tokens = _tokenize_code(line[:comment_index])
    tokens.append(Token(TokenKind.COMMENT, line[comment_index:]))
    return tokens


def tokenize(code: str) -> list[list[Token]]:
    """Tokenize every line of ``code``."""
    return [tokenize_line(line) for line in code.split("\n")]


def _render(token: Token) -> str:
    text = html.escape(token.text, quote=False)
    if token.kind is TokenKind.PLAIN:
        return text
    return f'<span class="{token.kind.value}">{text}</span>'


def highlight(code: str) -> str:
    """
    Render ``code`` as highlighted HTML.

    Args:
        code: Python source text

    Returns:
        HTML-escaped text with tokens wrapped in ``<span class="...">``
        markers, one output line per input line.
    """
    return "\n".join(
        "".join(_render(token) for token in line_tokens)
        for line_tokens in tokenize(code)
    )
