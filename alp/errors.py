from typing import List


class AlpError(Exception):
    """Base class for exceptions raised by the Alp toolchain."""


class ParseError(AlpError):
    """Raised by `parse_program` when the source has syntax errors."""
    def __init__(self, errors: List[str]):
        super().__init__(f"{len(errors)} syntax error(s): " + '; '.join(errors))
        self.errors = list(errors)


class EvaluationInterrupted(AlpError):
    """Evaluation was stopped from outside before producing a value.

    Never converted into an in-language `Error` object.
    """


class Cancelled(EvaluationInterrupted):
    def __init__(self):
        super().__init__('evaluation cancelled')


class DeadlineExceeded(EvaluationInterrupted):
    def __init__(self):
        super().__init__('evaluation deadline exceeded')
