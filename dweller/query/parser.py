"""Tokenizer and recursive-descent parser for the query DSL.

Grammar::

    decl  := "LIST" from
    from  := "FROM" expr
    expr  := unary (("AND" | "OR") unary)*
    unary := "!" tag | atom
    atom  := tag | "(" expr ")"
    tag   := "#" (letter | digit | "/" | "-" | "_")+

AND and OR share one precedence level and fold to the left, so
``#a AND #b OR #c`` reads as ``(#a AND #b) OR #c``.
"""

import re
from dataclasses import dataclass
from enum import Enum

from dweller.errors import QueryParseError

from .ast import And, Expr, From, ListDecl, Negate, Or, Source


class TokenType(str, Enum):
    WORD = "word"
    TAG = "tag"
    LPAREN = "("
    RPAREN = ")"
    BANG = "!"
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str
    position: int


@dataclass(frozen=True)
class Diagnostic:
    """A parse problem at a character offset in the query."""

    position: int
    message: str

    def __str__(self) -> str:
        return f"{self.message} at position {self.position}"

    def render(self, source: str) -> str:
        """Show the message under the query with a caret at the position."""
        return f"{source}\n{' ' * self.position}^ {self.message}"


TOKEN_RE = re.compile(
    r"(?P<ws>\s+)"
    r"|(?P<tag>#[\w/-]*)"
    r"|(?P<word>[A-Za-z]+)"
    r"|(?P<lparen>\()"
    r"|(?P<rparen>\))"
    r"|(?P<bang>!)"
)

_GROUP_TYPES = {
    "tag": TokenType.TAG,
    "word": TokenType.WORD,
    "lparen": TokenType.LPAREN,
    "rparen": TokenType.RPAREN,
    "bang": TokenType.BANG,
}

AND_KEYWORDS = ("AND", "and")
OR_KEYWORDS = ("OR", "or")


def tokenize(text: str) -> list[Token]:
    """Split query text into tokens.

    Raises:
        QueryParseError: listing every character that can't start a token.
    """
    tokens: list[Token] = []
    diagnostics: list[Diagnostic] = []
    pos = 0
    while pos < len(text):
        match = TOKEN_RE.match(text, pos)
        if not match:
            diagnostics.append(Diagnostic(pos, f"Unexpected character {text[pos]!r}"))
            pos += 1
            continue

        kind = match.lastgroup
        if kind != "ws":
            tokens.append(Token(_GROUP_TYPES[kind], match.group(), pos))
        pos = match.end()

    if diagnostics:
        raise QueryParseError(diagnostics)

    tokens.append(Token(TokenType.EOF, "", len(text)))
    return tokens


class Parser:
    """Parses one query into an AST."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens = tokenize(text)
        self.pos = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        token = self.tokens[self.pos]
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def _error(self, message: str, token: Token | None = None) -> QueryParseError:
        token = token or self.current
        found = f"'{token.text}'" if token.text else token.type.value
        return QueryParseError([Diagnostic(token.position, f"{message}, found {found}")])

    def _expect_keyword(self, keyword: str) -> None:
        token = self.current
        if token.type != TokenType.WORD or token.text.upper() != keyword:
            raise self._error(f"Expected {keyword}")
        self._advance()

    def parse(self) -> Expr:
        decl = self._decl()
        if self.current.type != TokenType.EOF:
            raise self._error("Unexpected trailing input")
        return decl

    def _decl(self) -> Expr:
        self._expect_keyword("LIST")
        return ListDecl(self._from())

    def _from(self) -> From:
        self._expect_keyword("FROM")
        return From(self._expr())

    def _expr(self) -> Expr:
        left = self._unary()
        while self.current.type == TokenType.WORD:
            op = self.current.text
            if op in AND_KEYWORDS:
                node = And
            elif op in OR_KEYWORDS:
                node = Or
            else:
                raise self._error("Expected AND or OR")
            self._advance()
            left = node(left, self._unary())
        return left

    def _unary(self) -> Expr:
        if self.current.type == TokenType.BANG:
            self._advance()
            return Negate(self._tag())
        return self._atom()

    def _atom(self) -> Expr:
        if self.current.type == TokenType.LPAREN:
            opening = self._advance()
            inner = self._expr()
            if self.current.type != TokenType.RPAREN:
                raise QueryParseError(
                    [
                        Diagnostic(
                            self.current.position,
                            f"Expected ')' to close '(' at position {opening.position}",
                        )
                    ]
                )
            self._advance()
            return inner
        return self._tag()

    def _tag(self) -> Expr:
        token = self.current
        if token.type != TokenType.TAG:
            raise self._error("Expected a tag or '('")
        if len(token.text) == 1:
            raise QueryParseError([Diagnostic(token.position, "Empty tag name")])
        self._advance()
        return Source.tag(token.text[1:])


def parse(text: str) -> Expr:
    """Compile query text into an AST.

    Raises:
        QueryParseError: with one or more diagnostics; no AST is produced.
    """
    return Parser(text).parse()
