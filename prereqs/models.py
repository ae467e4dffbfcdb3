from __future__ import annotations
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError


class RequirementType(str, Enum):
    NONE = "NONE"
    COURSE = "COURSE"
    EXAM = "EXAM"
    AND = "AND"
    OR = "OR"


class BaseRequirement(BaseModel):
    type: RequirementType


class Course(BaseRequirement):
    model_config = ConfigDict(frozen=True)

    type: Literal["COURSE"] = "COURSE"
    course: str

    def __str__(self) -> str:
        return self.course


class ExamScore(BaseRequirement):
    model_config = ConfigDict(frozen=True)

    type: Literal["EXAM"] = "EXAM"
    exam: str
    score: int

    def __str__(self) -> str:
        return f"{self.score} on '{self.exam}'"


class And(BaseRequirement):
    type: Literal["AND"] = "AND"
    requirements: list[Requirement]


class Or(BaseRequirement):
    type: Literal["OR"] = "OR"
    requirements: list[Requirement]


class Empty(BaseRequirement):
    type: Literal["NONE"] = "NONE"


Requirement = Annotated[
    Union[Course, ExamScore, And, Or, Empty],
    Field(discriminator="type"),
]

Qualification = Union[Course, ExamScore]

And.model_rebuild()
Or.model_rebuild()


class ParsedCourse(BaseModel):
    name: str
    code: str
    requisite_string: Optional[str] = None
    requisite: Requirement = Field(default_factory=Empty)


_requirement_adapter = TypeAdapter(Requirement)


def parse_requirement(raw: Optional[dict]) -> Requirement:
    """Validate a raw JSON requisite into a requirement tree.

    `None` and `{"type": "NONE"}` both mean "no requirement".

    Raises:
        ValueError: if the requisite has an unknown type or missing fields
    """
    if raw is None:
        return Empty()
    try:
        return _requirement_adapter.validate_python(raw)
    except ValidationError as e:
        raise ValueError(f"Invalid requisite {raw!r}: {e}") from e


def parse_courses(raw_courses: List[dict]) -> List[ParsedCourse]:
    if not isinstance(raw_courses, list):
        raise ValueError("Top-level JSON must be an array")

    parsed = []
    for raw in raw_courses:
        if not isinstance(raw, dict):
            raise ValueError(f"Course record must be an object, got: {raw!r}")
        try:
            parsed.append(
                ParsedCourse(
                    name=raw.get("name") or raw["code"],
                    code=raw["code"],
                    requisite_string=raw.get("requisite_string"),
                    requisite=parse_requirement(raw.get("requisite")),
                )
            )
        except KeyError as e:
            raise ValueError(f"Course record missing field {e}: {raw!r}") from e
    return parsed


def is_qualification(req: Requirement) -> bool:
    return isinstance(req, (Course, ExamScore))


def dump_requirement(req: Optional[Requirement]) -> dict:
    if req is None:
        return Empty().model_dump(mode="json")
    return req.model_dump(mode="json")
