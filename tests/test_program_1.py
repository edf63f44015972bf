from pathlib import Path

from alp.evaluator import Evaluator
from alp.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_1(capsys):
    with open(EXAMPLES / 'program_1.alp', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    evaluator = Evaluator()
    evaluator.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == 'Hello World!!'
