import pytest

from resource_api.infrastructure.exceptions import HTTPError
from resource_api.infrastructure.resource import (
    OffsetPagination,
    PagePagination,
    build_pagination_links,
    parse_pagination,
)
from resource_api.infrastructure.resource.pagination import MAX_OFFSET


def test_no_page_parameters():
    raw, pagination = parse_pagination({"filter[name]": ["a"]}, max_page_size=50)
    assert raw == {}
    assert pagination is None


def test_number_and_size():
    raw, pagination = parse_pagination({"page[number]": ["3"], "page[size]": ["10"]}, max_page_size=50)
    assert raw == {"number": "3", "size": "10"}
    assert pagination == PagePagination(number=3, size=10)
    assert (pagination.offset, pagination.limit) == (20, 10)


def test_offset_and_limit():
    raw, pagination = parse_pagination({"page[offset]": ["5"], "page[limit]": ["5"]}, max_page_size=50)
    assert raw == {"offset": "5", "limit": "5"}
    assert pagination == OffsetPagination(offset=5, limit=5)


def test_size_alone_means_first_page():
    _, pagination = parse_pagination({"page[size]": ["4"]}, max_page_size=50)
    assert pagination == PagePagination(number=1, size=4)


def test_limit_alone_means_offset_zero():
    _, pagination = parse_pagination({"page[limit]": ["4"]}, max_page_size=50)
    assert pagination == OffsetPagination(offset=0, limit=4)


@pytest.mark.parametrize("query,parameter", [
    ({"page[number]": ["1"], "page[limit]": ["5"]}, "page[limit]"),
    ({"page[number]": ["2"]}, "page[size]"),
    ({"page[offset]": ["2"]}, "page[limit]"),
    ({"page[size]": ["abc"]}, "page[size]"),
    ({"page[number]": ["0"], "page[size]": ["5"]}, "page[number]"),
    ({"page[offset]": ["-1"], "page[limit]": ["5"]}, "page[offset]"),
    ({"page[size]": ["51"]}, "page[size]"),
    ({"page[limit]": ["0"]}, "page[limit]"),
    ({"page[number]": [str(10 ** 19)], "page[size]": ["10"]}, "page[number]"),
    ({"page[offset]": [str(1 << 63)], "page[limit]": ["5"]}, "page[offset]"),
])
def test_invalid_parameters(query, parameter):
    with pytest.raises(HTTPError) as exc_info:
        parse_pagination(query, max_page_size=50)
    assert exc_info.value.status == 400
    assert exc_info.value.errors[0].source == {"parameter": parameter}


def test_page_links_in_the_middle():
    links = build_pagination_links(
        "http://host/api/items",
        {"page[number]": ["2"], "page[size]": ["10"]},
        PagePagination(number=2, size=10),
        total=50,
    )
    assert links == {
        "first": "http://host/api/items?page[number]=1&page[size]=10",
        "prev": "http://host/api/items?page[number]=1&page[size]=10",
        "next": "http://host/api/items?page[number]=3&page[size]=10",
        "last": "http://host/api/items?page[number]=5&page[size]=10",
    }


def test_page_links_on_first_and_last_page():
    first = build_pagination_links("http://h/items", {}, PagePagination(number=1, size=10), total=25)
    assert "prev" not in first
    assert first["last"].endswith("page[number]=3&page[size]=10")

    last = build_pagination_links("http://h/items", {}, PagePagination(number=3, size=10), total=25)
    assert "next" not in last
    assert last["prev"].endswith("page[number]=2&page[size]=10")


def test_page_links_for_empty_collection():
    links = build_pagination_links("http://h/items", {}, PagePagination(number=1, size=10), total=0)
    assert set(links) == {"first", "last"}
    assert links["last"].endswith("page[number]=1&page[size]=10")


def test_offset_links():
    links = build_pagination_links("http://h/items", {}, OffsetPagination(offset=15, limit=10), total=50)
    assert links == {
        "first": "http://h/items?page[offset]=0&page[limit]=10",
        "prev": "http://h/items?page[offset]=5&page[limit]=10",
        "next": "http://h/items?page[offset]=25&page[limit]=10",
        "last": "http://h/items?page[offset]=40&page[limit]=10",
    }


def test_offset_links_at_the_end():
    links = build_pagination_links("http://h/items", {}, OffsetPagination(offset=45, limit=10), total=50)
    assert "next" not in links
    assert links["prev"].endswith("page[offset]=35&page[limit]=10")


def test_links_keep_other_query_parameters():
    links = build_pagination_links(
        "http://h/items",
        {"filter[name]": ["bob"], "page[number]": ["1"], "page[size]": ["5"]},
        PagePagination(number=1, size=5),
        total=12,
    )
    assert links["next"] == "http://h/items?filter[name]=bob&page[number]=2&page[size]=5"


def test_largest_page_number_still_fits_an_offset():
    query = {"page[number]": [str(MAX_OFFSET // 10 + 1)], "page[size]": ["10"]}
    _, pagination = parse_pagination(query, max_page_size=50)
    assert pagination.offset <= MAX_OFFSET
