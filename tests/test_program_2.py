from pathlib import Path

from alp.evaluator import Evaluator
from alp.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_2_closure_outlives_defining_call(capsys):
    with open(EXAMPLES / 'program_2.alp', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    evaluator = Evaluator()
    evaluator.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == '5'
