import os
import uuid
from typing import Optional, Tuple

from dotenv import load_dotenv
from neo4j import Driver, GraphDatabase

from prereqs.logger import logger
from prereqs.models import ParsedCourse, Requirement, RequirementType


def get_db_credentials() -> Tuple[str, Tuple[str, str]]:
    """Load and validate Neo4j credentials from environment.

    Raises:
        ValueError: if required env vars are missing
    """
    load_dotenv()
    uri = os.getenv("NEO4J_DB_URI")
    username = os.getenv("NEO4J_USERNAME")
    password = os.getenv("NEO4J_PASSWORD")

    if not uri:
        raise ValueError("Missing NEO4J_DB_URI. Did you set the env?")
    if not username or not password:
        raise ValueError(
            "Missing NEO4J_USERNAME or NEO4J_PASSWORD. Did you set the env?"
        )

    return uri, (username, password)


def create_driver(uri, auth) -> Driver:
    driver = GraphDatabase.driver(uri, auth=auth)  # type: ignore
    driver.verify_connectivity()
    return driver


def clear_db(session):
    session.execute_write(lambda tx: tx.run("MATCH (n) DETACH DELETE n"))


## Create
def create_course(tx, course_code, course_name=None, requisite_string=None):
    # a bare prerequisite reference must not overwrite the catalog's name
    result = tx.run(
        """
        MERGE (c:COURSE { code: $code })
        ON CREATE SET
            c.uuid = $uuid
        SET c.name = coalesce($name, c.name, $code),
            c.requisite_string = coalesce($requisite_string, c.requisite_string)
        RETURN c.uuid AS uuid
        """,
        code=course_code,
        name=course_name,
        uuid=str(uuid.uuid4()),
        requisite_string=requisite_string,
    )
    return result.single()["uuid"]


def create_exam(tx, exam, score):
    result = tx.run(
        """
        MERGE (e:EXAM { exam: $exam, score: $score })
        ON CREATE SET
            e.uuid = $uuid,
            e.name = $name
        RETURN e.uuid AS uuid
        """,
        exam=exam,
        score=score,
        name=f"{score} on {exam}",
        uuid=str(uuid.uuid4()),
    )
    return result.single()["uuid"]


def create_reqgroup(tx, group_type):
    reqgroup_uuid = str(uuid.uuid4())
    tx.run(
        """
        CREATE (rg:ReqGroup {
            name: $type,
            uuid: $uuid,
            type: $type
        })
        """,
        type=group_type,
        uuid=reqgroup_uuid,
    )
    return reqgroup_uuid


def create_requires(tx, parent_uuid, child_uuid):
    tx.run(
        """
        MATCH (parent { uuid: $parent_uuid })
        MATCH (child { uuid: $child_uuid })
        MERGE (parent)-[:REQUIRES]->(child)
        """,
        parent_uuid=parent_uuid,
        child_uuid=child_uuid,
    )


def process_requisite(tx, req: Requirement, parent_uuid: str) -> Optional[str]:
    """Write a requirement tree below `parent_uuid`, returning the child's uuid."""
    match req.type:
        case RequirementType.NONE:
            return None
        case RequirementType.COURSE:
            child_uuid = create_course(tx, req.course)
        case RequirementType.EXAM:
            child_uuid = create_exam(tx, req.exam, req.score)
        case RequirementType.AND | RequirementType.OR:
            child_uuid = create_reqgroup(tx, req.type)
            for child in req.requirements:
                process_requisite(tx, child, parent_uuid=child_uuid)
        case t:
            raise ValueError(f"Unknown requisite type: {t}")

    create_requires(tx, parent_uuid, child_uuid)
    return child_uuid


def process_course(tx, course: ParsedCourse):
    course_uuid = create_course(
        tx, course.code, course.name, course.requisite_string or ""
    )
    process_requisite(tx, course.requisite, parent_uuid=course_uuid)
    return course_uuid


def load_catalog(session, courses):
    clear_db(session)
    logger.info("Cleared DB.")

    total = len(courses)
    for i, course in enumerate(courses):
        if i % 100 == 0:
            logger.info(f"Loading courses {i}/{total} - {round(100 * i / total, 2)}%")
        session.execute_write(process_course, course)

    logger.info(f"Loaded {total} courses into Neo4j.")
