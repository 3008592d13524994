import pytest
from precisely import assert_that, has_attrs

from blog.core.exceptions import ValidationError
from blog.repositories.paging import Direction, Page, PageRequest


def test_page_request_defaults() -> None:
    request = PageRequest()

    assert_that(request, has_attrs(page=0, size=10, sort="id", direction=Direction.ASC, offset=0))


def test_page_request_accepts_direction_as_string() -> None:
    request = PageRequest(page=2, size=5, sort="title", direction="desc")

    assert_that(request, has_attrs(direction=Direction.DESC, offset=10))


@pytest.mark.parametrize("kwargs", [
    {"page": -1},
    {"size": 0},
    {"size": -3},
    {"sort": ""},
    {"direction": "sideways"},
    {"page": True},
    {"page": False},
    {"size": True},
])
def test_page_request_rejects_bad_arguments(kwargs) -> None:
    with pytest.raises(ValidationError):
        PageRequest(**kwargs)


def test_page_metadata_for_middle_page() -> None:
    page = Page.of(["d", "e", "f"], 7, PageRequest(page=1, size=3))

    assert_that(page, has_attrs(total_elements=7, total_pages=3, has_next=True, has_previous=True))


def test_last_page_has_no_next() -> None:
    page = Page.of(["g"], 7, PageRequest(page=2, size=3))

    assert_that(page, has_attrs(total_pages=3, has_next=False, has_previous=True))


def test_page_past_the_end_is_empty_but_well_formed() -> None:
    page = Page.of([], 7, PageRequest(page=9, size=3))

    assert_that(page, has_attrs(items=[], total_elements=7, total_pages=3, has_next=False, has_previous=True))


def test_empty_result_has_no_pages() -> None:
    page = Page.of([], 0, PageRequest())

    assert_that(page, has_attrs(total_pages=0, has_next=False, has_previous=False))
