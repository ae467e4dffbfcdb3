import json
from typing import Dict, Iterable, List, Optional, Tuple

from prereqs.builder import equivalence_map, formula_to_tree, substitute_equivalents
from prereqs.config import Settings
from prereqs.database import build_database
from prereqs.errors import UnsatisfiableClauseError
from prereqs.logger import logger
from prereqs.minimizer import MinimizeReport, Minimizer
from prereqs.models import (
    Empty,
    ParsedCourse,
    Qualification,
    Requirement,
    parse_requirement,
)


def minimize_requirements(
    courses: Iterable[Tuple[str, Requirement]],
    settings: Optional[Settings] = None,
    equivalents: Optional[Dict[Qualification, Requirement]] = None,
) -> Tuple[Dict[str, Optional[Requirement]], MinimizeReport]:
    """Minimize every course's requirement tree against all the others.

    Returns the minimized tree per course code (None when the requirement
    turns out to be vacuous) and the minimization report. Courses whose
    requirement could not be minimized keep their original tree.
    """
    settings = settings or Settings()
    courses = list(courses)
    if equivalents:
        courses = [
            (code, substitute_equivalents(tree, equivalents)) for code, tree in courses
        ]

    database = build_database(courses, rank_exams=settings.rank_exam_scores)
    report = Minimizer(database, max_rounds=settings.max_rounds).minimize()

    originals = dict(courses)
    minimized: Dict[str, Optional[Requirement]] = {}
    for symbol, code in database.roots.items():
        if code in report.failed:
            minimized[code] = originals[code]
            continue
        try:
            minimized[code] = formula_to_tree(
                database.entries[symbol], database.table, code=code
            )
        except UnsatisfiableClauseError as e:
            logger.error(str(e))
            report.failed[code] = str(e)
            minimized[code] = originals[code]

    return minimized, report


def minimize_catalog(
    courses: List[ParsedCourse],
    settings: Optional[Settings] = None,
    equivalents: Optional[Dict[Qualification, Requirement]] = None,
) -> Tuple[List[ParsedCourse], MinimizeReport]:
    minimized, report = minimize_requirements(
        ((course.code, course.requisite) for course in courses),
        settings=settings,
        equivalents=equivalents,
    )
    updated = [
        course.model_copy(update={"requisite": minimized[course.code] or Empty()})
        for course in courses
    ]
    return updated, report


def load_equivalents(path: str) -> Dict[Qualification, Requirement]:
    """Load equivalence groups from a JSON array of requirement trees.

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the file is not a JSON array of requisites
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            groups = json.load(f)
    except FileNotFoundError as e:
        raise FileNotFoundError(f"File not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse {path} as JSON: {e}") from e

    if not isinstance(groups, list):
        raise ValueError(f"{path} must contain a JSON array of requisites")
    mapping = equivalence_map(parse_requirement(group) for group in groups)
    logger.info(f"Loaded {len(groups)} equivalence groups from {path}")
    return mapping
