"""Parser for the Alp language.

This module implements an operator-precedence (Pratt) parser:

1. **Statements** are recognised by their leading token: `let`,
   `return`, or anything else, which is parsed as an expression
   statement. A trailing semicolon is consumed when present.

2. **Expressions** are parsed by `Parser.parse_expression`. Every token
   kind that can start an expression has a prefix rule, every token kind
   that can continue one has an infix rule and a precedence. The loop in
   `parse_expression` keeps handing the expression built so far to the
   next infix rule while that operator binds tighter than the caller's
   precedence, which yields left associativity and the usual precedence
   climbing.

Parsing is tolerant: problems are recorded in `Parser.errors` and the
parser carries on with the next statement, so a single pass reports as
many errors as it can. `parse_program` is the convenience entry point
that raises `ParseError` when any were recorded.
"""

from __future__ import annotations

import enum
from typing import Callable, Dict, List, Optional, Tuple

from .ast import (
    Program, Statement, Expression, LetStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, Identifier, IntegerLiteral,
    StringLiteral, BooleanLiteral, PrefixExpression, InfixExpression,
    IfExpression, FunctionLiteral, CallExpression, ArrayLiteral,
    HashLiteral, IndexExpression,
)
from .errors import ParseError
from .lexer import Lexer
from .token import Token, TokenType
from .types import INT64_MAX, INT64_MIN


class Precedence(enum.IntEnum):
    LOWEST = enum.auto()
    EQUALS = enum.auto()       # ==
    LESSGREATER = enum.auto()  # > or <
    SUM = enum.auto()          # +
    PRODUCT = enum.auto()      # *
    PREFIX = enum.auto()       # -X or !X
    CALL = enum.auto()         # myFunction(X) or array[X]


PRECEDENCES: Dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
    TokenType.LBRACKET: Precedence.CALL,
}


PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Expression], Optional[Expression]]


class Parser:
    def __init__(self, lexer):
        self.lexer = lexer
        self.errors: List[str] = []

        self.cur_token: Token = Token(TokenType.ILLEGAL, '')
        self.peek_token: Token = Token(TokenType.ILLEGAL, '')

        self.prefix_parse_fns: Dict[TokenType, PrefixParseFn] = {}
        self.infix_parse_fns: Dict[TokenType, InfixParseFn] = {}

        self.register_prefix(TokenType.IDENT, self.parse_identifier)
        self.register_prefix(TokenType.INT, self.parse_integer_literal)
        self.register_prefix(TokenType.STRING, self.parse_string_literal)
        self.register_prefix(TokenType.TRUE, self.parse_boolean)
        self.register_prefix(TokenType.FALSE, self.parse_boolean)
        self.register_prefix(TokenType.BANG, self.parse_prefix_expression)
        self.register_prefix(TokenType.MINUS, self.parse_prefix_expression)
        self.register_prefix(TokenType.LPAREN, self.parse_grouped_expression)
        self.register_prefix(TokenType.IF, self.parse_if_expression)
        self.register_prefix(TokenType.FUNCTION, self.parse_function_literal)
        self.register_prefix(TokenType.LBRACKET, self.parse_array_literal)
        self.register_prefix(TokenType.LBRACE, self.parse_hash_literal)

        for kind in (TokenType.PLUS, TokenType.MINUS, TokenType.SLASH,
                     TokenType.ASTERISK, TokenType.EQ, TokenType.NOT_EQ,
                     TokenType.LT, TokenType.GT):
            self.register_infix(kind, self.parse_infix_expression)
        self.register_infix(TokenType.LPAREN, self.parse_call_expression)
        self.register_infix(TokenType.LBRACKET, self.parse_index_expression)

        # Read two tokens so cur_token and peek_token are both set
        self.next_token()
        self.next_token()

    def register_prefix(self, kind: TokenType, fn: PrefixParseFn) -> None:
        self.prefix_parse_fns[kind] = fn

    def register_infix(self, kind: TokenType, fn: InfixParseFn) -> None:
        self.infix_parse_fns[kind] = fn

    # Token handling

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: TokenType) -> bool:
        return self.cur_token.type == kind

    def peek_token_is(self, kind: TokenType) -> bool:
        return self.peek_token.type == kind

    def expect_peek(self, kind: TokenType) -> bool:
        if self.peek_token_is(kind):
            self.next_token()
            return True
        self.peek_error(kind)
        return False

    def peek_error(self, kind: TokenType) -> None:
        self.errors.append(
            f"expected next token to be {kind}, got {self.peek_token.type} instead"
        )

    def no_prefix_parse_fn_error(self, kind: TokenType) -> None:
        self.errors.append(f"no prefix parse function for {kind} found")

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    # Statements

    def parse_program(self) -> Program:
        program = Program()
        while not self.cur_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self.next_token()
        return program

    def parse_statement(self) -> Optional[Statement]:
        if self.cur_token.type == TokenType.LET:
            return self.parse_let_statement()
        if self.cur_token.type == TokenType.RETURN:
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> Optional[LetStatement]:
        token = self.cur_token
        if not self.expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)
        if not self.expect_peek(TokenType.ASSIGN):
            return None
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return LetStatement(token, name, value)

    def parse_return_statement(self) -> ReturnStatement:
        token = self.cur_token
        if self.peek_token_is(TokenType.SEMICOLON) or self.peek_token_is(TokenType.EOF) \
                or self.peek_token_is(TokenType.RBRACE):
            # bare `return`
            if self.peek_token_is(TokenType.SEMICOLON):
                self.next_token()
            return ReturnStatement(token, None)
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ReturnStatement(token, value)

    def parse_expression_statement(self) -> ExpressionStatement:
        token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return ExpressionStatement(token, expression)

    def parse_block_statement(self) -> BlockStatement:
        block = BlockStatement(self.cur_token)
        self.next_token()
        while not self.cur_token_is(TokenType.RBRACE) and not self.cur_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self.next_token()
        if self.cur_token_is(TokenType.EOF):
            self.errors.append(f"expected next token to be {TokenType.RBRACE}, got {TokenType.EOF} instead")
        return block

    # Expressions (Pratt parser)

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None
        left = prefix()
        while not self.peek_token_is(TokenType.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None or left is None:
                return left
            self.next_token()
            left = infix(left)
        return left

    def parse_identifier(self) -> Identifier:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Optional[IntegerLiteral]:
        token = self.cur_token
        value = int(token.literal)
        if value < INT64_MIN or value > INT64_MAX:
            self.errors.append(f'could not parse "{token.literal}" as integer')
            return None
        return IntegerLiteral(token, value)

    def parse_string_literal(self) -> StringLiteral:
        return StringLiteral(self.cur_token, self.cur_token.literal)

    def parse_boolean(self) -> BooleanLiteral:
        return BooleanLiteral(self.cur_token, self.cur_token_is(TokenType.TRUE))

    def parse_prefix_expression(self) -> PrefixExpression:
        token = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left: Expression) -> InfixExpression:
        token = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        return InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self) -> Optional[Expression]:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenType.RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Optional[IfExpression]:
        token = self.cur_token
        if not self.expect_peek(TokenType.LPAREN):
            return None
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenType.RPAREN):
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        consequence = self.parse_block_statement()
        alternative = None
        if self.peek_token_is(TokenType.ELSE):
            self.next_token()
            if not self.expect_peek(TokenType.LBRACE):
                return None
            alternative = self.parse_block_statement()
        return IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self) -> Optional[FunctionLiteral]:
        token = self.cur_token
        if not self.expect_peek(TokenType.LPAREN):
            return None
        parameters = self.parse_function_parameters()
        if parameters is None:
            return None
        if not self.expect_peek(TokenType.LBRACE):
            return None
        body = self.parse_block_statement()
        return FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self) -> Optional[List[Identifier]]:
        identifiers: List[Identifier] = []
        if self.peek_token_is(TokenType.RPAREN):
            self.next_token()
            return identifiers
        if not self.expect_peek(TokenType.IDENT):
            return None
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))
        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            if not self.expect_peek(TokenType.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))
        if not self.expect_peek(TokenType.RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function: Expression) -> Optional[CallExpression]:
        token = self.cur_token
        arguments = self.parse_expression_list(TokenType.RPAREN)
        if arguments is None:
            return None
        return CallExpression(token, function, arguments)

    def parse_expression_list(self, end: TokenType) -> Optional[List[Expression]]:
        items: List[Expression] = []
        if self.peek_token_is(end):
            self.next_token()
            return items
        self.next_token()
        items.append(self.parse_expression(Precedence.LOWEST))
        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            items.append(self.parse_expression(Precedence.LOWEST))
        if not self.expect_peek(end):
            return None
        return items

    def parse_array_literal(self) -> Optional[ArrayLiteral]:
        token = self.cur_token
        elements = self.parse_expression_list(TokenType.RBRACKET)
        if elements is None:
            return None
        return ArrayLiteral(token, elements)

    def parse_index_expression(self, left: Expression) -> Optional[IndexExpression]:
        token = self.cur_token
        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenType.RBRACKET):
            return None
        return IndexExpression(token, left, index)

    def parse_hash_literal(self) -> Optional[HashLiteral]:
        token = self.cur_token
        pairs: List[Tuple[Expression, Expression]] = []
        while not self.peek_token_is(TokenType.RBRACE):
            self.next_token()
            key = self.parse_expression(Precedence.LOWEST)
            if not self.expect_peek(TokenType.COLON):
                return None
            self.next_token()
            value = self.parse_expression(Precedence.LOWEST)
            pairs.append((key, value))
            if not self.peek_token_is(TokenType.RBRACE) and not self.expect_peek(TokenType.COMMA):
                return None
        if not self.expect_peek(TokenType.RBRACE):
            return None
        return HashLiteral(token, pairs)


def parse_program(source: str) -> Program:
    """Parse Alp source code into a Program AST.

    Raises ParseError carrying every recorded message if the source has
    syntax errors.
    """
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    if parser.errors:
        raise ParseError(parser.errors)
    return program
