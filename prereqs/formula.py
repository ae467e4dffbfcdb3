from __future__ import annotations
from typing import AbstractSet, FrozenSet, Iterable, Iterator, List, Set, Tuple

from prereqs.symbols import Symbol

# A clause is satisfied when any one of its symbols holds.
Clause = FrozenSet[Symbol]


def clause_key(clause: Clause) -> Tuple[int, Tuple[int, ...]]:
    return (len(clause), tuple(sorted(clause)))


class Formula:
    """A conjunction of clauses (CNF).

    `Formula([])` is always satisfied and is the identity for `&`.
    `Formula([frozenset()])` is never satisfied and is the identity for `|`,
    since unioning the empty clause into any other clause leaves it unchanged.
    """

    __slots__ = ("clauses",)

    def __init__(self, clauses: Iterable[Iterable[Symbol]] = ()):
        self.clauses: List[Clause] = [frozenset(c) for c in clauses]

    @classmethod
    def and_identity(cls) -> Formula:
        return cls([])

    @classmethod
    def or_identity(cls) -> Formula:
        return cls([frozenset()])

    @classmethod
    def symbol(cls, symbol: Symbol) -> Formula:
        return cls([frozenset([symbol])])

    def __and__(self, other: Formula) -> Formula:
        return Formula(self.clauses + other.clauses)

    def __or__(self, other: Formula) -> Formula:
        # (a1 & a2) | (b1 & b2) == (a1|b1) & (a1|b2) & (a2|b1) & (a2|b2)
        return Formula(
            left | right for left in self.clauses for right in other.clauses
        )

    def __iter__(self) -> Iterator[Clause]:
        return iter(self.clauses)

    def __len__(self) -> int:
        return len(self.clauses)

    def __getitem__(self, index: int) -> Clause:
        return self.clauses[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Formula):
            return NotImplemented
        return self.clauses == other.clauses

    def __repr__(self) -> str:
        body = ", ".join(
            "{" + ", ".join(str(s) for s in sorted(c)) + "}" for c in self.clauses
        )
        return f"Formula([{body}])"

    def size(self) -> int:
        return sum(len(c) for c in self.clauses)

    def symbols(self) -> Set[Symbol]:
        found: Set[Symbol] = set()
        for clause in self.clauses:
            found.update(clause)
        return found

    def has_empty_clause(self) -> bool:
        return any(not c for c in self.clauses)

    def empty_clause_index(self) -> int | None:
        for i, clause in enumerate(self.clauses):
            if not clause:
                return i
        return None

    def copy(self) -> Formula:
        return Formula(self.clauses)

    def canonical(self) -> Formula:
        """Deduplicate clauses and order them by size, then members."""
        return Formula(sorted(set(self.clauses), key=clause_key))

    def evaluate(self, true_symbols: AbstractSet[Symbol]) -> bool:
        return all(not clause.isdisjoint(true_symbols) for clause in self.clauses)
