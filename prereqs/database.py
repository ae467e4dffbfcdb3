from typing import Dict, Iterable, Iterator, Optional, Set, Tuple

from prereqs.builder import tree_to_formula
from prereqs.formula import Formula
from prereqs.logger import logger
from prereqs.models import Course, Requirement
from prereqs.symbols import Symbol, SymbolTable


class ImplicationDatabase:
    """Maps a symbol to the formula that satisfying it requires.

    A symbol without an entry is a leaf. Keys are fixed once the database is
    built; only the formulas are reduced, by the minimizer.
    """

    def __init__(self, table: SymbolTable):
        self.table = table
        self.entries: Dict[Symbol, Formula] = {}
        # symbol -> course code, for entries that came from the catalog
        self.roots: Dict[Symbol, str] = {}

    def add(self, symbol: Symbol, formula: Formula, code: Optional[str] = None):
        if symbol in self.entries:
            raise ValueError(f"Duplicate requirement entry for symbol {symbol}")
        self.entries[symbol] = formula
        if code is not None:
            self.roots[symbol] = code

    def get(self, symbol: Symbol) -> Optional[Formula]:
        return self.entries.get(symbol)

    def name(self, symbol: Symbol) -> str:
        if symbol in self.roots:
            return self.roots[symbol]
        return str(self.table.resolve(symbol))

    def remove_clause(self, symbol: Symbol, index: int):
        del self.entries[symbol].clauses[index]

    def remove_symbol(self, symbol: Symbol, index: int, member: Symbol):
        formula = self.entries[symbol]
        clause = formula.clauses[index]
        if member not in clause or len(clause) < 2:
            raise ValueError(
                f"Cannot remove {member} from clause {index} of {self.name(symbol)}"
            )
        formula.clauses[index] = clause - {member}

    def size(self) -> Tuple[int, int]:
        clauses = sum(len(f) for f in self.entries.values())
        symbols = sum(f.size() for f in self.entries.values())
        return clauses, symbols

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.entries

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def rank_exam_scores(database: ImplicationDatabase) -> int:
    """Let a higher score on an exam imply the next lower interned score.

    Returns the number of entries added. Symbols that already have an entry
    are left alone.
    """
    added = 0
    for ladder in database.table.exam_ladders().values():
        for higher, lower in zip(ladder, ladder[1:]):
            if higher in database:
                continue
            database.add(higher, Formula.symbol(lower))
            added += 1
    if added:
        logger.debug(f"Added {added} exam score ranking entries")
    return added


def build_database(
    courses: Iterable[Tuple[str, Requirement]],
    table: Optional[SymbolTable] = None,
    rank_exams: bool = True,
) -> ImplicationDatabase:
    """Build the implication database from `(course code, tree)` pairs.

    Raises:
        ValueError: if the same course code appears twice
    """
    database = ImplicationDatabase(table if table is not None else SymbolTable())
    seen: Set[str] = set()

    for code, tree in courses:
        if code in seen:
            raise ValueError(f"Duplicate course code: {code}")
        seen.add(code)
        symbol = database.table.intern(Course(course=code))
        database.add(symbol, tree_to_formula(tree, database.table), code=code)

    if rank_exams:
        rank_exam_scores(database)

    clauses, symbols = database.size()
    logger.info(
        f"Built implication database: {len(database.roots)} courses, "
        f"{len(database.table)} symbols, {clauses} clauses, {symbols} literals"
    )
    return database
