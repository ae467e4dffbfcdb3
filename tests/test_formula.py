from prereqs.formula import Formula


def test_or_distributes_single_clauses():
    assert Formula([{1, 2}]) | Formula([{2, 3, 4}]) == Formula([{1, 2, 3, 4}])


def test_or_cross_product():
    left = Formula([{1}, {2}])
    right = Formula([{3}, {4}])
    result = left | right
    assert result == Formula([{1, 3}, {1, 4}, {2, 3}, {2, 4}])
    assert len(result) == len(left) * len(right)


def test_and_concatenates():
    assert Formula([{1}, {2, 3}]) & Formula([{4}]) == Formula([{1}, {2, 3}, {4}])


def test_identities():
    formula = Formula([{1, 2}, {3}])
    assert Formula.and_identity() & formula == formula
    assert formula & Formula.and_identity() == formula
    assert Formula.or_identity() | formula == formula
    assert formula | Formula.or_identity() == formula


def test_and_identity_is_always_satisfied():
    assert Formula.and_identity().evaluate(set())


def test_or_identity_is_never_satisfied():
    assert not Formula.or_identity().evaluate({1, 2, 3})
    assert Formula.or_identity().has_empty_clause()


def test_evaluate():
    formula = Formula([{1, 2}, {3}])
    assert formula.evaluate({1, 3})
    assert formula.evaluate({2, 3})
    assert not formula.evaluate({1, 2})


def test_size_and_symbols():
    formula = Formula([{1, 2}, {2, 3}])
    assert formula.size() == 4
    assert formula.symbols() == {1, 2, 3}


def test_canonical_dedupes_and_orders():
    formula = Formula([{3, 4}, {2}, {4, 3}, {1, 5}])
    assert formula.canonical().clauses == [
        frozenset({2}),
        frozenset({1, 5}),
        frozenset({3, 4}),
    ]


def test_empty_clause_index():
    assert Formula([{1}, set(), {2}]).empty_clause_index() == 1
    assert Formula([{1}]).empty_clause_index() is None
