"""Abstract Syntax Tree (AST) definitions for the Alp language.

The AST classes defined in this module represent the syntactic structure
of parsed Alp programs. Every node keeps the token it was built from so
that literals can be rendered and diagnostics can point back at the
source. `str(node)` renders a node back to source-like text with
explicit grouping, which is what the parser tests compare against.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .token import Token


@dataclass
class Node:
    """Base class for all AST nodes."""

    def token_literal(self) -> str:
        raise NotImplementedError


@dataclass
class Statement(Node):
    token: Token

    def token_literal(self) -> str:
        return self.token.literal


@dataclass
class Expression(Node):
    token: Token

    def token_literal(self) -> str:
        return self.token.literal


@dataclass
class Program(Node):
    statements: List[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ''

    def __str__(self) -> str:
        return ''.join(str(s) for s in self.statements)


# Expressions

@dataclass
class Identifier(Expression):
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class IntegerLiteral(Expression):
    value: int

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class StringLiteral(Expression):
    value: str

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class BooleanLiteral(Expression):
    value: bool

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class PrefixExpression(Expression):
    operator: str
    right: Optional[Expression]

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Expression):
    left: Expression
    operator: str
    right: Optional[Expression]

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IfExpression(Expression):
    condition: Optional[Expression]
    consequence: 'BlockStatement'
    alternative: Optional['BlockStatement'] = None

    def __str__(self) -> str:
        out = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out


@dataclass
class FunctionLiteral(Expression):
    parameters: List[Identifier]
    body: 'BlockStatement'

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass
class CallExpression(Expression):
    function: Expression  # Identifier or FunctionLiteral
    arguments: List[Expression]

    def __str__(self) -> str:
        args = ', '.join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass
class ArrayLiteral(Expression):
    elements: List[Expression]

    def __str__(self) -> str:
        return '[' + ', '.join(str(e) for e in self.elements) + ']'


@dataclass
class HashLiteral(Expression):
    pairs: List[Tuple[Expression, Expression]]  # source order

    def __str__(self) -> str:
        return '{' + ', '.join(f"{k}:{v}" for k, v in self.pairs) + '}'


@dataclass
class IndexExpression(Expression):
    left: Expression
    index: Optional[Expression]

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"


# Statements

@dataclass
class LetStatement(Statement):
    name: Identifier
    value: Optional[Expression]

    def __str__(self) -> str:
        out = f"{self.token_literal()} {self.name} = "
        if self.value is not None:
            out += str(self.value)
        return out + ';'


@dataclass
class ReturnStatement(Statement):
    return_value: Optional[Expression] = None

    def __str__(self) -> str:
        out = self.token_literal() + ' '
        if self.return_value is not None:
            out += str(self.return_value)
        return out + ';'


@dataclass
class ExpressionStatement(Statement):
    expression: Optional[Expression]

    def __str__(self) -> str:
        if self.expression is not None:
            return str(self.expression)
        return ''


@dataclass
class BlockStatement(Statement):
    statements: List[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return ''.join(str(s) for s in self.statements)
