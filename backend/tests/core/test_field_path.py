"""Field paths — verifies dotted/indexed rendering of validation locations."""

from roster.core.field_path import format_field_path


def test_nested_path_with_index():
    assert format_field_path(("courses", 0, "courseName")) == "courses[0].courseName"


def test_simple_dotted_path():
    assert format_field_path(("student", "fullName")) == "student.fullName"


def test_single_segment():
    assert format_field_path(("furigana",)) == "furigana"


def test_empty_location():
    assert format_field_path(()) == ""
