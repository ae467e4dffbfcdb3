from typing import Iterable


class PrereqError(Exception):
    """Base class for errors raised while minimizing prerequisite formulas."""


class UnsatisfiableClauseError(PrereqError):
    """A requirement contains a clause no qualification can satisfy.

    This means the source tree was contradictory (for example an empty OR
    group) or the minimizer removed the last member of a clause.
    """

    def __init__(self, code: str, clause_index: int):
        self.code = code
        self.clause_index = clause_index
        super().__init__(
            f"Requirement for '{code}' has an empty clause at index {clause_index}"
        )


class IterationLimitError(PrereqError):
    def __init__(self, max_rounds: int, unconverged: Iterable[str]):
        self.max_rounds = max_rounds
        self.unconverged = sorted(unconverged)
        super().__init__(
            f"Minimization did not converge after {max_rounds} rounds; "
            f"still changing: {', '.join(self.unconverged)}"
        )
