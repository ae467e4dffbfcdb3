import pytest

from prereqs.models import Course, ExamScore
from prereqs.symbols import SymbolTable


def test_intern_is_stable():
    table = SymbolTable()
    first = table.intern(Course(course="CS 2400"))
    again = table.intern(Course(course="CS 2400"))
    assert first == again
    assert len(table) == 1


def test_intern_allocates_increasing_symbols():
    table = SymbolTable()
    symbols = [
        table.intern(Course(course="CS 2400")),
        table.intern(ExamScore(exam="AP Calculus AB", score=4)),
        table.intern(Course(course="MATH 2301")),
    ]
    assert symbols == [0, 1, 2]


def test_resolve_is_inverse_of_intern():
    table = SymbolTable()
    exam = ExamScore(exam="AP Calculus AB", score=4)
    symbol = table.intern(exam)
    assert table.resolve(symbol) == exam
    assert exam in table


def test_resolve_foreign_symbol():
    table = SymbolTable()
    table.intern(Course(course="CS 2400"))
    with pytest.raises(KeyError):
        table.resolve(5)


def test_course_and_exam_are_distinct():
    table = SymbolTable()
    assert table.intern(Course(course="AP")) != table.intern(
        ExamScore(exam="AP", score=3)
    )


def test_exam_ladders_highest_first():
    table = SymbolTable()
    three = table.intern(ExamScore(exam="AP Calculus AB", score=3))
    five = table.intern(ExamScore(exam="AP Calculus AB", score=5))
    four = table.intern(ExamScore(exam="AP Calculus AB", score=4))
    other = table.intern(ExamScore(exam="AP Physics 1", score=4))
    table.intern(Course(course="CS 2400"))

    ladders = table.exam_ladders()
    assert ladders == {"AP Calculus AB": [five, four, three], "AP Physics 1": [other]}
