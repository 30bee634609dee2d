"""Request Body Inspector — verifies NONE / EMPTY_OBJECT / NON_EMPTY classification."""

import pytest

from roster.core.domain_types import BodyState
from roster.core.request_body import classify_body


@pytest.mark.parametrize("raw", [None, b"", b"   ", b"\n\t \r\n"])
def test_absent_or_whitespace_is_none(raw):
    assert classify_body(raw) is BodyState.NONE


@pytest.mark.parametrize("raw", [b"{}", b"  {}  ", b"\n{}\n"])
def test_bare_braces_are_empty_object(raw):
    assert classify_body(raw) is BodyState.EMPTY_OBJECT


@pytest.mark.parametrize("raw", [
    b"{ }",
    b'{"student": {}}',
    b"[]",
    b"not json",
    b"\xff\xfe",
])
def test_anything_else_is_non_empty(raw):
    assert classify_body(raw) is BodyState.NON_EMPTY
