import pytest

from slowcinema.core.enums import MovieSortField, ReviewListSort, SortOrder
from slowcinema.exceptions.movie_exceptions import (
    InvalidPaginationError,
    InvalidSortFieldError,
)
from slowcinema.inputs.movie import (
    DEFAULT_LIMIT,
    get_list_params,
    get_reviews_page_params,
    parse_int_param,
)


def test_get_list_params_defaults():
    params = get_list_params()

    assert params.limit == DEFAULT_LIMIT
    assert params.skip == 0
    assert params.sort == MovieSortField.UPDATED_AT
    assert params.order == SortOrder.DESC


def test_get_list_params_parses_strings():
    params = get_list_params(limit=" 25 ", skip="50", sort="length", order="asc")

    assert params.limit == 25
    assert params.skip == 50
    assert params.sort == MovieSortField.DURATION
    assert params.order == SortOrder.ASC


def test_get_list_params_unknown_order_is_descending():
    assert get_list_params(order="sideways").order == SortOrder.DESC


def test_get_list_params_rejects_unknown_sort():
    with pytest.raises(InvalidSortFieldError):
        get_list_params(sort="secret")


@pytest.mark.parametrize("value", ["abc", "1e3", "2.5"])
def test_parse_int_param_rejects_non_integers(value):
    with pytest.raises(InvalidPaginationError):
        parse_int_param("limit", value, DEFAULT_LIMIT)


def test_parse_int_param_blank_uses_default():
    assert parse_int_param("skip", "", 0) == 0
    assert parse_int_param("skip", None, 0) == 0


def test_get_reviews_page_params():
    params = get_reviews_page_params(sort=ReviewListSort.RATING, limit="10", skip="20")

    assert params.sort == ReviewListSort.RATING
    assert params.limit == 10
    assert params.skip == 20


def test_get_reviews_page_params_rejects_bad_window():
    with pytest.raises(InvalidPaginationError):
        get_reviews_page_params(limit="0")
