# Alp language package
# This package provides a Pratt parser and a tree-walking interpreter for the Alp language.
from .context import Context
from .environment import Environment
from .errors import AlpError, ParseError, EvaluationInterrupted, Cancelled, DeadlineExceeded
from .evaluator import Evaluator, evaluate, run_program
from .lexer import Lexer
from .parser import Parser, parse_program

__all__ = [
    'Context',
    'Environment',
    'AlpError',
    'ParseError',
    'EvaluationInterrupted',
    'Cancelled',
    'DeadlineExceeded',
    'Evaluator',
    'evaluate',
    'run_program',
    'Lexer',
    'Parser',
    'parse_program',
]
