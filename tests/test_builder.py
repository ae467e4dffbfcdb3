import pytest

from prereqs.builder import (
    equivalence_map,
    flatten,
    formula_to_tree,
    substitute_equivalents,
    tree_to_formula,
)
from prereqs.errors import UnsatisfiableClauseError
from prereqs.formula import Formula
from prereqs.models import And, Course, Empty, ExamScore, Or
from prereqs.symbols import SymbolTable


def course(code):
    return Course(course=code)


def test_leaf_to_formula():
    table = SymbolTable()
    formula = tree_to_formula(course("CS 2400"), table)
    assert formula == Formula([{table.lookup(course("CS 2400"))}])


def test_none_is_always_satisfied():
    assert tree_to_formula(Empty(), SymbolTable()) == Formula.and_identity()


def test_and_to_formula():
    table = SymbolTable()
    formula = tree_to_formula(And(requirements=[course("A"), course("B")]), table)
    assert formula == Formula([{0}, {1}])


def test_or_to_formula():
    table = SymbolTable()
    formula = tree_to_formula(Or(requirements=[course("A"), course("B")]), table)
    assert formula == Formula([{0, 1}])


def test_empty_or_is_unsatisfiable():
    formula = tree_to_formula(Or(requirements=[]), SymbolTable())
    assert formula == Formula.or_identity()


def test_nested_tree_distributes():
    # B & (C | (B & D))
    table = SymbolTable()
    tree = And(
        requirements=[
            course("B"),
            Or(requirements=[course("C"), And(requirements=[course("B"), course("D")])]),
        ]
    )
    b, c, d = 0, 1, 2
    formula = tree_to_formula(tree, table)
    assert table.resolve(b) == course("B")
    assert table.resolve(c) == course("C")
    assert table.resolve(d) == course("D")
    assert formula == Formula([{b}, {c, b}, {c, d}])


def test_formula_to_tree_vacuous():
    assert formula_to_tree(Formula.and_identity(), SymbolTable()) is None


def test_formula_to_tree_collapses_single_member_clauses():
    table = SymbolTable()
    a = table.intern(course("A"))
    b = table.intern(course("B"))
    c = table.intern(course("C"))
    tree = formula_to_tree(Formula([{a}, {c, b}]), table)
    assert tree == And(
        requirements=[course("A"), Or(requirements=[course("B"), course("C")])]
    )


def test_formula_to_tree_orders_courses_before_exams():
    table = SymbolTable()
    exam = table.intern(ExamScore(exam="AP Calculus AB", score=4))
    cs = table.intern(course("CS 2400"))
    tree = formula_to_tree(Formula([{exam, cs}]), table)
    assert tree.requirements[0].requirements == [
        course("CS 2400"),
        ExamScore(exam="AP Calculus AB", score=4),
    ]


def test_formula_to_tree_rejects_empty_clause():
    table = SymbolTable()
    a = table.intern(course("A"))
    with pytest.raises(UnsatisfiableClauseError, match="'CS 1'"):
        formula_to_tree(Formula([{a}, set()]), table, code="CS 1")


def test_flatten_merges_same_operator():
    tree = And(
        requirements=[
            course("A"),
            And(requirements=[course("B"), Or(requirements=[course("C")])]),
        ]
    )
    assert flatten(tree) == And(
        requirements=[course("A"), course("B"), Or(requirements=[course("C")])]
    )


def test_substitute_equivalents():
    group = Or(requirements=[course("CS 1"), course("MATH 1")])
    equivalents = equivalence_map([group])
    tree = Or(requirements=[course("CS 1"), course("PHYS 1")])

    assert substitute_equivalents(tree, equivalents) == Or(
        requirements=[course("CS 1"), course("MATH 1"), course("PHYS 1")]
    )


def test_substitute_equivalents_leaves_unknown_alone():
    equivalents = equivalence_map([Or(requirements=[course("CS 1"), course("MATH 1")])])
    assert substitute_equivalents(course("PHYS 1"), equivalents) == course("PHYS 1")
    assert substitute_equivalents(Empty(), equivalents) == Empty()
