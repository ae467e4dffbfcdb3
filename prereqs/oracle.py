from collections import deque
from typing import AbstractSet, Dict, FrozenSet, Optional, Set, Tuple

from prereqs.database import ImplicationDatabase
from prereqs.logger import logger
from prereqs.symbols import Symbol

# (symbol, clause index) whose clause may not be used for substitution
Forbidden = Optional[Tuple[Symbol, int]]


class ImplicationOracle:
    """Decides whether satisfying one clause guarantees another is satisfied.

    `implies(lhs, rhs)` searches for a chain of substitutions that turns the
    clause `lhs` into a subset of `rhs`. A member `s` of the current clause
    may be replaced by any clause of `s`'s database entry: if `s` holds then
    that clause holds, so the new clause is still implied by `lhs`.
    """

    def __init__(self, database: ImplicationDatabase):
        self.database = database
        self._memo: Dict[Tuple[FrozenSet[Symbol], FrozenSet[Symbol], Forbidden], bool] = {}
        self.queries = 0
        self.expansions = 0

    def invalidate(self):
        self._memo.clear()

    def implies(
        self,
        lhs: AbstractSet[Symbol],
        rhs: AbstractSet[Symbol],
        forbidden: Forbidden = None,
    ) -> bool:
        lhs = frozenset(lhs)
        rhs = frozenset(rhs)
        key = (lhs, rhs, forbidden)
        if key in self._memo:
            return self._memo[key]

        self.queries += 1
        result = self._search(lhs, rhs, forbidden)
        self._memo[key] = result
        return result

    def _is_valid(self, candidate: FrozenSet[Symbol], rhs: FrozenSet[Symbol]) -> bool:
        # a leaf outside rhs can never be substituted away
        return all(s in rhs or s in self.database for s in candidate)

    def _search(
        self, lhs: FrozenSet[Symbol], rhs: FrozenSet[Symbol], forbidden: Forbidden
    ) -> bool:
        if lhs <= rhs:
            return True
        if not self._is_valid(lhs, rhs):
            return False

        seen: Set[FrozenSet[Symbol]] = {lhs}
        worklist = deque([lhs])

        while worklist:
            candidate = worklist.popleft()
            if candidate <= rhs:
                return True

            for symbol in sorted(candidate):
                formula = self.database.get(symbol)
                if formula is None:
                    continue
                rest = candidate - {symbol}
                for index, clause in enumerate(formula):
                    if forbidden == (symbol, index):
                        continue
                    child = rest | clause
                    if child in seen:
                        continue
                    seen.add(child)
                    if not self._is_valid(child, rhs):
                        continue
                    self.expansions += 1
                    if child <= rhs:
                        return True
                    worklist.append(child)

        logger.debug(
            f"No implication from {sorted(lhs)} to {sorted(rhs)} "
            f"after visiting {len(seen)} clauses"
        )
        return False
