import pytest

from minimize_requisites import parse_args


def test_parse_args_valid_input(tmp_path):
    courses_file = tmp_path / "courses.json"
    courses_file.write_text("[]")

    input_path, output_path = parse_args([str(courses_file), "out.json"])
    assert input_path == str(courses_file)
    assert output_path == "out.json"


def test_parse_args_without_output(tmp_path):
    courses_file = tmp_path / "courses.json"
    courses_file.write_text("[]")

    assert parse_args([str(courses_file)]) == (str(courses_file), None)


def test_parse_args_missing_arguments():
    with pytest.raises(ValueError, match="Usage:"):
        parse_args([])


def test_parse_args_file_not_found():
    with pytest.raises(ValueError, match="does not exist"):
        parse_args(["/nonexistent/courses.json"])


def test_parse_args_not_a_file(tmp_path):
    with pytest.raises(ValueError, match="must be a file"):
        parse_args([str(tmp_path)])
