from alp.ast import (
    Program, LetStatement, ReturnStatement, ExpressionStatement, Identifier,
    IntegerLiteral, PrefixExpression,
)
from alp.token import Token, TokenType


def ident(name):
    return Identifier(Token(TokenType.IDENT, name), name)


def test_program_string():
    program = Program([
        LetStatement(Token(TokenType.LET, 'let'), ident('myVar'), ident('anotherVar')),
    ])
    assert str(program) == 'let myVar = anotherVar;'


def test_return_and_expression_statement_strings():
    five = IntegerLiteral(Token(TokenType.INT, '5'), 5)
    program = Program([
        ReturnStatement(Token(TokenType.RETURN, 'return'), five),
        ExpressionStatement(Token(TokenType.MINUS, '-'),
                            PrefixExpression(Token(TokenType.MINUS, '-'), '-', five)),
    ])
    assert str(program) == 'return 5;(-5)'


def test_token_literal():
    program = Program([
        LetStatement(Token(TokenType.LET, 'let'), ident('x'), ident('y')),
    ])
    assert program.token_literal() == 'let'
    assert Program().token_literal() == ''
