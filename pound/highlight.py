"""Table-driven syntax highlighting.

Each language is described by data: its file extensions, the token that
starts a line comment and groups of keywords sharing one color. A single
tokenizer (:class:`TableHighlight`) works from that description, so adding
a language means adding an entry to :data:`LANGUAGES`.

Colors are blessed formatting attribute names (``'bright_red'``,
``'normal'``, ...) resolved against the terminal when a row is drawn.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence, Union

if TYPE_CHECKING:
    from .document import Document

logger = logging.getLogger(__name__)


class HighlightType(Enum):
    """Highlight tag for one rendered character."""
    NORMAL = "normal"
    NUMBER = "number"
    STRING = "string"
    CHAR_LITERAL = "char_literal"
    COMMENT = "comment"
    SEARCH_MATCH = "search_match"


@dataclass(frozen=True)
class Keyword:
    """Highlight tag for a keyword character, carrying its group's color."""
    color: str


Tag = Union[HighlightType, Keyword]


@dataclass(frozen=True)
class KeywordGroup:
    color: str
    words: tuple[str, ...]


DEFAULT_COLORS = {
    HighlightType.NORMAL: 'normal',
    HighlightType.NUMBER: 'bright_cyan',
    HighlightType.STRING: 'bright_green',
    HighlightType.CHAR_LITERAL: 'green',
    HighlightType.COMMENT: 'bright_black',
    HighlightType.SEARCH_MATCH: 'bright_blue',
}

SEPARATORS = frozenset(',.()+-/*=~%<>"\';&')


class SyntaxHighlight(ABC):
    """Capability set every highlighter provides."""

    @abstractmethod
    def extensions(self) -> Sequence[str]:
        pass

    @abstractmethod
    def file_type(self) -> str:
        pass

    @abstractmethod
    def comment_token(self) -> str:
        pass

    @abstractmethod
    def update_syntax(self, at: int, document: "Document"):
        """Recompute the highlight tags of row ``at`` from its render text."""
        pass

    def syntax_color(self, tag: Tag) -> str:
        if isinstance(tag, Keyword):
            return tag.color
        return DEFAULT_COLORS[tag]

    def is_separator(self, ch: str) -> bool:
        return ch.isspace() or ch in SEPARATORS

    def color_row(self, term, render: str, highlight: Sequence[Tag], out):
        """Write ``render`` to ``out`` colored by ``highlight``.

        A color sequence is only emitted where the tag changes between
        neighbouring characters; the color is reset after the last one.
        """
        current: Optional[Tag] = None
        for ch, tag in zip(render, highlight):
            if tag != current:
                out.push_str(str(getattr(term, self.syntax_color(tag))))
                current = tag
            out.push(ch)
        if current is not None:
            out.push_str(str(term.normal))


class TableHighlight(SyntaxHighlight):
    """Highlighter described entirely by a language table entry."""

    def __init__(self, name: str, extensions: Sequence[str], comment_token: str,
                 keywords: Sequence[KeywordGroup] = ()):
        self._name = name
        self._extensions = tuple(extensions)
        self._comment_token = comment_token
        self._keywords = tuple(keywords)
        # Longest first so the first hit at a position is the longest match
        self._keyword_table = sorted(
            ((word, group.color) for group in self._keywords for word in group.words),
            key=lambda item: len(item[0]),
            reverse=True,
        )

    def __repr__(self) -> str:
        return f"TableHighlight({self._name!r})"

    def extensions(self) -> Sequence[str]:
        return self._extensions

    def file_type(self) -> str:
        return self._name

    def comment_token(self) -> str:
        return self._comment_token

    def keywords(self) -> Sequence[KeywordGroup]:
        return self._keywords

    def update_syntax(self, at: int, document: "Document"):
        row = document.row(at)
        row.highlight = self.highlight_line(row.render)
        assert len(row.highlight) == len(row.render)

    def highlight_line(self, render: str) -> list[Tag]:
        """Tokenize one rendered line. No state carries over between rows."""
        highlight: list[Tag] = []
        length = len(render)
        comment = self._comment_token
        previous_separator = True
        in_string: Optional[str] = None
        i = 0

        while i < length:
            ch = render[i]
            previous = highlight[i - 1] if i > 0 else HighlightType.NORMAL

            if in_string is None and comment and render.startswith(comment, i):
                highlight.extend([HighlightType.COMMENT] * (length - i))
                break

            if in_string is not None:
                tag = HighlightType.STRING if in_string == '"' else HighlightType.CHAR_LITERAL
                highlight.append(tag)
                if ch == '\\' and i + 1 < length:
                    highlight.append(tag)
                    i += 2
                    continue
                if ch == in_string:
                    in_string = None
                i += 1
                previous_separator = True
                continue
            if ch in ('"', "'"):
                in_string = ch
                highlight.append(HighlightType.STRING if ch == '"' else HighlightType.CHAR_LITERAL)
                i += 1
                continue

            if (('0' <= ch <= '9' and (previous_separator or previous == HighlightType.NUMBER))
                    or (ch == '.' and previous == HighlightType.NUMBER)):
                highlight.append(HighlightType.NUMBER)
                i += 1
                previous_separator = False
                continue

            if previous_separator:
                match = self._match_keyword(render, i)
                if match is not None:
                    word, color = match
                    highlight.extend([Keyword(color)] * len(word))
                    i += len(word)
                    previous_separator = False
                    continue

            highlight.append(HighlightType.NORMAL)
            previous_separator = self.is_separator(ch)
            i += 1

        return highlight

    def _match_keyword(self, render: str, at: int) -> Optional[tuple[str, str]]:
        for word, color in self._keyword_table:
            end = at + len(word)
            if end > len(render) or not render.startswith(word, at):
                continue
            if end == len(render) or self.is_separator(render[end]):
                return word, color
        return None


class PlainHighlight(SyntaxHighlight):
    """Used for drawing when no language has been selected."""

    def extensions(self) -> Sequence[str]:
        return ()

    def file_type(self) -> str:
        return ""

    def comment_token(self) -> str:
        return ""

    def update_syntax(self, at: int, document: "Document"):
        row = document.row(at)
        row.highlight = [HighlightType.NORMAL] * len(row.render)


PLAIN = PlainHighlight()


LANGUAGES: list[TableHighlight] = [
    TableHighlight(
        "rust",
        extensions=["rs"],
        comment_token="//",
        keywords=[
            KeywordGroup('bright_red', (
                "mod", "unsafe", "extern", "crate", "use", "type", "struct", "enum",
                "union", "const", "static", "mut", "let", "if", "else", "impl",
                "trait", "for", "fn", "self", "Self", "while", "true", "false",
                "in", "continue", "break", "loop", "match",
            )),
            KeywordGroup('normal', (
                "isize", "i8", "i16", "i32", "i64", "usize", "u8", "u16", "u32",
                "u64", "f32", "f64", "char", "str", "bool",
            )),
        ],
    ),
    TableHighlight(
        "c",
        extensions=["c", "h"],
        comment_token="//",
        keywords=[
            KeywordGroup('bright_yellow', (
                "switch", "if", "while", "for", "break", "continue", "return",
                "else", "struct", "union", "typedef", "static", "enum", "case",
                "default", "do", "goto", "sizeof",
            )),
            KeywordGroup('bright_green', (
                "int", "long", "double", "float", "char", "unsigned", "signed",
                "void", "const", "short",
            )),
        ],
    ),
    TableHighlight(
        "python",
        extensions=["py"],
        comment_token="#",
        keywords=[
            KeywordGroup('bright_magenta', (
                "def", "class", "return", "if", "elif", "else", "for", "while",
                "in", "is", "not", "and", "or", "import", "from", "as", "with",
                "try", "except", "finally", "raise", "pass", "break", "continue",
                "lambda", "yield", "global", "nonlocal", "assert", "del", "async",
                "await",
            )),
            KeywordGroup('bright_cyan', ("None", "True", "False", "self")),
        ],
    ),
]


def select_syntax(extension: Optional[str],
                  languages: Optional[Sequence[SyntaxHighlight]] = None) -> Optional[SyntaxHighlight]:
    """Return the first highlighter whose extension list contains ``extension``."""
    if not extension:
        return None
    for language in (LANGUAGES if languages is None else languages):
        if extension in language.extensions():
            logger.debug("Selected %s highlighting for .%s", language.file_type(), extension)
            return language
    return None
