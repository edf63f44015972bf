from pathlib import Path

from alp.evaluator import Evaluator
from alp.parser import parse_program

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_4_hashes_in_arrays(capsys):
    with open(EXAMPLES / 'program_4.alp', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    evaluator = Evaluator()
    evaluator.run(ast)
    out = capsys.readouterr().out.strip()
    assert out.splitlines() == ['Alice', 'Anna', '52']
