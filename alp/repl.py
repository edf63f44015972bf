"""Interactive read-eval-print loop for Alp."""

from typing import List, Optional, TextIO

from .context import Context
from .environment import Environment
from .errors import EvaluationInterrupted
from .evaluator import Evaluator
from .lexer import Lexer
from .parser import Parser

PROMPT = '>> '
RECURSION_MESSAGE = 'maximum recursion depth exceeded'


def start(in_stream: TextIO, out_stream: TextIO, timeout: Optional[float] = None,
          evaluator: Optional[Evaluator] = None) -> None:
    """Read lines from `in_stream` until it is exhausted, printing results.

    Bindings persist across lines. When `timeout` is given each line gets
    its own deadline of that many seconds.
    """
    env = Environment()
    if evaluator is None:
        evaluator = Evaluator()

    while True:
        out_stream.write(PROMPT)
        out_stream.flush()
        line = in_stream.readline()
        if not line:
            return

        parser = Parser(Lexer(line))
        program = parser.parse_program()
        if parser.errors:
            print_parser_errors(out_stream, parser.errors)
            continue

        ctx = Context.with_timeout(timeout) if timeout is not None else Context.background()
        try:
            evaluated = evaluator.execute(ctx, program, env)
        except EvaluationInterrupted as e:
            out_stream.write(f"{e}\n")
            continue
        except RecursionError:
            out_stream.write(RECURSION_MESSAGE + '\n')
            continue
        if evaluated is not None:
            out_stream.write(evaluated.inspect() + '\n')


def print_parser_errors(out_stream: TextIO, errors: List[str]) -> None:
    for msg in errors:
        out_stream.write('\t' + msg + '\n')
