from typing import Dict, Iterable, List, Optional, Set, Tuple

from prereqs.builder import collect_qualifications
from prereqs.logger import logger
from prereqs.models import Course, Requirement


class CourseGraph:
    """Dependency graph of courses: course -> courses its requirement mentions."""

    def __init__(self):
        self.graph: Dict[str, Set[str]] = {}

    def add_course(self, course_code: str):
        if course_code not in self.graph:
            self.graph[course_code] = set()

    def add_requires(self, parent_code: str, child_code: str):
        self.add_course(parent_code)
        self.add_course(child_code)
        self.graph[parent_code].add(child_code)

    def get_prerequisites(self, course_code: str) -> Set[str]:
        return self.graph.get(course_code, set())

    def edges(self) -> List[Tuple[str, str]]:
        return sorted(
            (parent, child)
            for parent, children in self.graph.items()
            for child in children
        )


def build_course_graph(requirements: Dict[str, Optional[Requirement]]) -> CourseGraph:
    """Build the graph from (minimized) requirement trees.

    Exam scores are not courses and do not become nodes.
    """
    graph = CourseGraph()
    for code in sorted(requirements):
        graph.add_course(code)
        tree = requirements[code]
        if tree is None:
            continue
        for qualification in collect_qualifications(tree):
            if isinstance(qualification, Course):
                graph.add_requires(code, qualification.course)
    logger.info(
        f"Built course graph with {len(graph.graph)} courses "
        f"and {len(graph.edges())} edges"
    )
    return graph


def topological_sort(
    graph: CourseGraph, courses: Iterable[str]
) -> Tuple[List[str], bool]:
    """DFS topological sort, prerequisites first.

    Returns:
        - sorted_courses: courses in dependency order ([] on a cycle)
        - has_cycle: whether a cycle was found
    """
    visited: Dict[str, int] = {}  # 0: unvisited, 1: visiting, 2: visited
    sorted_courses: List[str] = []
    has_cycle = False

    courses = sorted(set(courses))
    for course in courses:
        visited[course] = 0

    def dfs(course: str):
        nonlocal has_cycle

        if visited[course] == 1:
            logger.warn(f"Cycle detected in prerequisites involving {course}")
            has_cycle = True
            return
        if visited[course] == 2:
            return

        visited[course] = 1
        for prereq in sorted(graph.get_prerequisites(course)):
            if prereq in visited:
                dfs(prereq)
        visited[course] = 2
        sorted_courses.append(course)

    for course in courses:
        if visited[course] == 0:
            dfs(course)

    if has_cycle:
        return [], True
    return sorted_courses, False
