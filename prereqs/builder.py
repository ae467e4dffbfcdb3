from typing import Dict, Iterable, List, Optional

from prereqs.errors import UnsatisfiableClauseError
from prereqs.formula import Formula
from prereqs.models import (
    And,
    Course,
    Empty,
    ExamScore,
    Or,
    Qualification,
    Requirement,
    RequirementType,
)
from prereqs.symbols import SymbolTable


def tree_to_formula(tree: Requirement, table: SymbolTable) -> Formula:
    """Convert a requirement tree to CNF, interning every qualification.

    OR nodes distribute over their children's clauses, so the clause count of
    an OR is the product of its children's clause counts.
    """
    match tree.type:
        case RequirementType.COURSE | RequirementType.EXAM:
            return Formula.symbol(table.intern(tree))
        case RequirementType.NONE:
            return Formula.and_identity()
        case RequirementType.AND:
            formula = Formula.and_identity()
            for child in tree.requirements:
                formula = formula & tree_to_formula(child, table)
            return formula
        case RequirementType.OR:
            formula = Formula.or_identity()
            for child in tree.requirements:
                formula = formula | tree_to_formula(child, table)
            return formula
        case t:
            raise ValueError(f"Unknown RequirementType {t}")


def _sort_key(qualification: Qualification):
    if isinstance(qualification, Course):
        return (0, qualification.course, 0)
    return (1, qualification.exam, -qualification.score)


def formula_to_tree(
    formula: Formula, table: SymbolTable, code: str = "<unknown>"
) -> Optional[Requirement]:
    """Convert a formula back into a requirement tree.

    Returns None when the formula has no clauses (no requirement).

    Raises:
        UnsatisfiableClauseError: if the formula contains an empty clause
    """
    if len(formula) == 0:
        return None

    children: List[Requirement] = []
    for i, clause in enumerate(formula):
        if not clause:
            raise UnsatisfiableClauseError(code, i)
        leaves = sorted((table.resolve(s) for s in clause), key=_sort_key)
        if len(leaves) == 1:
            children.append(leaves[0])
        else:
            children.append(Or(requirements=leaves))
    return And(requirements=children)


def substitute_equivalents(
    tree: Requirement, equivalents: Dict[Qualification, Requirement]
) -> Requirement:
    """Replace qualifications with the tree of their equivalence group.

    Used for cross-listed courses: "CS 1" may be satisfied by "MATH 1" too.
    Nested nodes of the same operator are flattened afterwards.
    """
    match tree.type:
        case RequirementType.COURSE | RequirementType.EXAM:
            return equivalents.get(tree, tree)
        case RequirementType.NONE:
            return tree
        case RequirementType.AND | RequirementType.OR:
            children = [
                substitute_equivalents(child, equivalents)
                for child in tree.requirements
            ]
            return flatten(tree.model_copy(update={"requirements": children}))
        case t:
            raise ValueError(f"Unknown RequirementType {t}")


def flatten(tree: Requirement) -> Requirement:
    """Merge AND-in-AND and OR-in-OR children into their parent."""
    if tree.type not in (RequirementType.AND, RequirementType.OR):
        return tree

    children: List[Requirement] = []
    for child in tree.requirements:
        child = flatten(child)
        if child.type == tree.type:
            children.extend(child.requirements)
        else:
            children.append(child)
    return tree.model_copy(update={"requirements": children})


def equivalence_map(groups: Iterable[Requirement]) -> Dict[Qualification, Requirement]:
    """Map each qualification of an equivalence group to the whole group.

    A group is usually an OR of courses, e.g. `OR[CS 1, MATH 1]`.
    """
    mapping: Dict[Qualification, Requirement] = {}
    for group in groups:
        for qualification in collect_qualifications(group):
            mapping[qualification] = group
    return mapping


def collect_qualifications(tree: Requirement) -> List[Qualification]:
    if isinstance(tree, (Course, ExamScore)):
        return [tree]
    if isinstance(tree, Empty):
        return []
    found: List[Qualification] = []
    for child in tree.requirements:
        found.extend(collect_qualifications(child))
    return found
