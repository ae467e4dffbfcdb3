#!/usr/bin/env python3
"""
minimize_requisites.py

Simplify every course's parsed prerequisite tree, using the other courses'
prerequisites to drop redundant alternatives and requirements.

Usage:
    python minimize_requisites.py courses.parsed.json [output.json]

If output.json is not provided, results are written to stdout.
"""

import json
import os
import sys

from prereqs.config import load_settings
from prereqs.graph import build_course_graph, topological_sort
from prereqs.logger import logger
from prereqs.models import dump_requirement, parse_courses
from prereqs.pipeline import load_equivalents, minimize_catalog


def parse_args(argv):
    if len(argv) < 1 or len(argv) > 2:
        raise ValueError(
            "Usage: minimize_requisites.py <courses.parsed.json> [output.json]"
        )

    input_path = argv[0]
    output_path = argv[1] if len(argv) == 2 else None

    if not os.path.exists(input_path):
        raise ValueError(f"{input_path} does not exist")
    if not os.path.isfile(input_path):
        raise ValueError(f"{input_path} must be a file")

    return input_path, output_path


def load_json(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise FileNotFoundError(f"File not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse {path} as JSON: {e}") from e


def to_json(courses):
    return [
        {
            "name": course.name,
            "code": course.code,
            "requisite_string": course.requisite_string,
            "requisite": dump_requirement(course.requisite),
        }
        for course in courses
    ]


def main(input_path, output_path=None):
    settings = load_settings()
    courses = parse_courses(load_json(input_path))
    logger.info(f"Loaded {len(courses)} courses from {input_path}")

    equivalents = None
    if settings.equivalents_path:
        equivalents = load_equivalents(settings.equivalents_path)

    minimized, report = minimize_catalog(courses, settings, equivalents)

    graph = build_course_graph({c.code: c.requisite for c in minimized})
    _, has_cycle = topological_sort(graph, graph.graph.keys())
    if has_cycle:
        logger.warn("Minimized prerequisites contain a cycle")

    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(to_json(minimized), f, ensure_ascii=False, indent=2)
    else:
        json.dump(to_json(minimized), sys.stdout, ensure_ascii=False, indent=2)

    print("\nSummary:", file=sys.stderr)
    print(f"  Courses: {len(minimized)}", file=sys.stderr)
    print(f"  Rounds: {report.rounds}", file=sys.stderr)
    print(f"  Clauses removed: {report.clauses_removed}", file=sys.stderr)
    print(f"  Symbols removed: {report.symbols_removed}", file=sys.stderr)
    print(f"  Failed: {len(report.failed)}", file=sys.stderr)
    for code, message in sorted(report.failed.items()):
        print(f"    {code}: {message}", file=sys.stderr)
    if not report.converged:
        print(f"  Still changing: {', '.join(report.unconverged)}", file=sys.stderr)

    return report


if __name__ == "__main__":
    try:
        input_path, output_path = parse_args(sys.argv[1:])
        main(input_path, output_path)
    except (ValueError, FileNotFoundError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)
