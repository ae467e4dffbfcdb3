# load.py: Clears the database before loading the minimized catalog at <catalog-path> into it
import sys

from prereqs.db import create_driver, get_db_credentials, load_catalog
from prereqs.models import parse_courses
from minimize_requisites import load_json


def main(catalog_path):
    uri, auth = get_db_credentials()
    courses = parse_courses(load_json(catalog_path))

    driver = create_driver(uri, auth)
    try:
        with driver.session() as session:
            load_catalog(session, courses)
    finally:
        driver.close()


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: load.py <catalog-path>", file=sys.stderr)
        sys.exit(1)
    try:
        main(sys.argv[1])
    except (ValueError, FileNotFoundError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)
