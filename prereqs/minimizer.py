from typing import Dict, List, Optional, Set

from pydantic import BaseModel, Field

from prereqs.config import DEFAULT_MAX_ROUNDS
from prereqs.database import ImplicationDatabase
from prereqs.errors import IterationLimitError, UnsatisfiableClauseError
from prereqs.logger import logger
from prereqs.oracle import ImplicationOracle
from prereqs.symbols import Symbol


class MinimizeReport(BaseModel):
    rounds: int = 0
    clauses_removed: int = 0
    symbols_removed: int = 0
    # course code -> diagnostic, for entries excluded from minimization
    failed: Dict[str, str] = Field(default_factory=dict)
    unconverged: List[str] = Field(default_factory=list)

    @property
    def converged(self) -> bool:
        return not self.unconverged


class Minimizer:
    """Reduces every formula of a database to a fixed point, in place.

    Two reductions are applied, one mutation at a time:

    - a clause is dropped when another clause of the same formula implies it
      (`a & (a | b)` becomes `a`)
    - a member of a clause is dropped when it implies another member of the
      same clause (`a | b` becomes `b` when `a` implies `b`)

    Neither reduction changes which assignments satisfy a formula, given the
    implications recorded in the database.
    """

    def __init__(
        self,
        database: ImplicationDatabase,
        oracle: Optional[ImplicationOracle] = None,
        max_rounds: int = DEFAULT_MAX_ROUNDS,
    ):
        if max_rounds <= 0:
            raise ValueError("max_rounds must be a positive integer")
        self.database = database
        self.oracle = oracle if oracle is not None else ImplicationOracle(database)
        self.max_rounds = max_rounds

    def minimize(self) -> MinimizeReport:
        report = MinimizeReport()
        active = self._check_entries(report)
        changed: Set[Symbol] = set()

        for round_number in range(1, self.max_rounds + 1):
            report.rounds = round_number
            changed = set()

            for symbol in sorted(active):
                try:
                    while self._reduce_once(symbol, report):
                        changed.add(symbol)
                except UnsatisfiableClauseError as e:
                    logger.error(str(e))
                    report.failed[e.code] = str(e)
                    active.discard(symbol)
                    changed.discard(symbol)

            logger.debug(f"Round {round_number}: {len(changed)} formulas reduced")
            if not changed:
                break
        else:
            error = IterationLimitError(
                self.max_rounds, (self.database.name(s) for s in changed)
            )
            logger.error(str(error))
            report.unconverged = error.unconverged

        for symbol in active:
            self.database.entries[symbol] = self.database.entries[symbol].canonical()

        logger.info(
            f"Minimized {len(active)} formulas in {report.rounds} rounds: "
            f"removed {report.clauses_removed} clauses and "
            f"{report.symbols_removed} symbols "
            f"({self.oracle.queries} implication queries)"
        )
        if report.failed:
            logger.warn(
                f"{len(report.failed)} requirements could not be minimized: "
                f"{', '.join(sorted(report.failed))}"
            )
        return report

    def _check_entries(self, report: MinimizeReport) -> Set[Symbol]:
        active = set()
        for symbol in self.database:
            try:
                self._verify(symbol)
            except UnsatisfiableClauseError as e:
                logger.error(str(e))
                report.failed[e.code] = str(e)
                continue
            active.add(symbol)
        return active

    def _verify(self, symbol: Symbol):
        index = self.database.entries[symbol].empty_clause_index()
        if index is not None:
            raise UnsatisfiableClauseError(self.database.name(symbol), index)

    def _reduce_once(self, symbol: Symbol, report: MinimizeReport) -> bool:
        if self._drop_redundant_clause(symbol):
            report.clauses_removed += 1
        elif self._drop_redundant_symbol(symbol):
            report.symbols_removed += 1
        else:
            return False

        self.oracle.invalidate()
        self._verify(symbol)
        return True

    def _drop_redundant_clause(self, symbol: Symbol) -> bool:
        clauses = self.database.entries[symbol].clauses
        for i, clause in enumerate(clauses):
            for j, other in enumerate(clauses):
                if i == j:
                    continue
                if self.oracle.implies(other, clause, forbidden=(symbol, i)):
                    logger.debug(
                        f"{self.database.name(symbol)}: clause {sorted(clause)} "
                        f"is implied by {sorted(other)}"
                    )
                    self.database.remove_clause(symbol, i)
                    return True
        return False

    def _drop_redundant_symbol(self, symbol: Symbol) -> bool:
        clauses = self.database.entries[symbol].clauses
        for i, clause in enumerate(clauses):
            if len(clause) < 2:
                continue
            members = sorted(clause)
            for member in members:
                for other in members:
                    if member == other:
                        continue
                    if self.oracle.implies({member}, {other}, forbidden=(symbol, i)):
                        logger.debug(
                            f"{self.database.name(symbol)}: {member} implies "
                            f"{other} in clause {members}"
                        )
                        self.database.remove_symbol(symbol, i, member)
                        return True
        return False
