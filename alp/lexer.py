"""Tokenizer for the Alp language.

Raw source is split into terminals by a `lark` lexer running in lexer-only
mode (no parse table is built). The resulting lark tokens are mapped onto
`alp.token.Token` values and handed out one at a time through
`Lexer.next_token`, which is the pull-based interface the parser consumes.
Identifiers are checked against the keyword table after lexing, so `let`
and `letter` are told apart without separate keyword terminals.
"""

from __future__ import annotations

from typing import Iterator, List

from lark import Lark

from .token import Token, TokenType, lookup_ident


ALP_TERMINALS = r"""
    IDENT: /[A-Za-z_][A-Za-z0-9_]*/
    INT: /[0-9]+/
    STRING: /"[^"]*"/

    EQ: "=="
    NOT_EQ: "!="
    ASSIGN: "="
    PLUS: "+"
    MINUS: "-"
    BANG: "!"
    ASTERISK: "*"
    SLASH: "/"
    LT: "<"
    GT: ">"

    COMMA: ","
    SEMICOLON: ";"
    COLON: ":"
    LPAREN: "("
    RPAREN: ")"
    LBRACE: "{"
    RBRACE: "}"
    LBRACKET: "["
    RBRACKET: "]"

    // Anything no other terminal accepts, one character at a time
    ILLEGAL.-1: /./

    %import common.WS
    %ignore WS
"""


ALP_LEXER = Lark(ALP_TERMINALS, parser=None, lexer='basic')


def _convert(raw) -> Token:
    kind = raw.type
    if kind == 'IDENT':
        return Token(lookup_ident(raw.value), raw.value, raw.line, raw.column)
    if kind == 'STRING':
        return Token(TokenType.STRING, raw.value[1:-1], raw.line, raw.column)
    return Token(TokenType[kind], raw.value, raw.line, raw.column)


class Lexer:
    """Pull-based token source over a string of Alp source code."""

    def __init__(self, source: str):
        self.source = source
        self._tokens: Iterator = ALP_LEXER.lex(source)
        self._line = 1
        self._column = 1
        self._done = False

    def next_token(self) -> Token:
        if not self._done:
            raw = next(self._tokens, None)
            if raw is not None:
                token = _convert(raw)
                self._line = raw.end_line or raw.line
                self._column = raw.end_column or raw.column
                return token
            self._done = True
        return Token(TokenType.EOF, '', self._line, self._column)

    def __iter__(self):
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return


def tokenize(source: str) -> List[Token]:
    """Return every token of `source`, including the trailing EOF."""
    return list(Lexer(source))
