from typing import Dict, Iterator, List, NewType

from prereqs.models import ExamScore, Qualification

Symbol = NewType("Symbol", int)


class SymbolTable:
    """Interns qualifications as dense integer symbols for one run.

    Symbols are handed out from a counter in first-seen order and are never
    reused. Not safe for concurrent mutation.
    """

    def __init__(self):
        self._by_qualification: Dict[Qualification, Symbol] = {}
        self._by_symbol: List[Qualification] = []

    def intern(self, qualification: Qualification) -> Symbol:
        symbol = self._by_qualification.get(qualification)
        if symbol is None:
            symbol = Symbol(len(self._by_symbol))
            self._by_qualification[qualification] = symbol
            self._by_symbol.append(qualification)
        return symbol

    def resolve(self, symbol: Symbol) -> Qualification:
        if not 0 <= symbol < len(self._by_symbol):
            raise KeyError(f"Symbol {symbol} was not produced by this table")
        return self._by_symbol[symbol]

    def lookup(self, qualification: Qualification) -> Symbol | None:
        return self._by_qualification.get(qualification)

    def symbols(self) -> Iterator[Symbol]:
        return (Symbol(i) for i in range(len(self._by_symbol)))

    def exam_ladders(self) -> Dict[str, List[Symbol]]:
        """Group exam score symbols by exam, highest score first."""
        ladders: Dict[str, List[Symbol]] = {}
        for symbol, qualification in enumerate(self._by_symbol):
            if isinstance(qualification, ExamScore):
                ladders.setdefault(qualification.exam, []).append(Symbol(symbol))
        for ladder in ladders.values():
            ladder.sort(key=lambda s: self._by_symbol[s].score, reverse=True)
        return ladders

    def __contains__(self, qualification: object) -> bool:
        return qualification in self._by_qualification

    def __len__(self) -> int:
        return len(self._by_symbol)
