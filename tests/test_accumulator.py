from smart_search.schemas.movie import MovieSearchResponse
from smart_search.services.accumulator import apply_page, has_more

from conftest import make_page


def _page(ids, page=1, total_pages=3):
    return MovieSearchResponse.model_validate(make_page(ids, page=page, total_pages=total_pages))


def _ids(movies):
    return [movie.id for movie in movies]


def test_second_page_appends_only_unseen_ids():
    movies = apply_page([], _page([1, 2], page=1), is_first_page=True)
    movies = apply_page(movies, _page([2, 3], page=2), is_first_page=False)
    assert _ids(movies) == [1, 2, 3]


def test_first_page_replaces_everything():
    movies = apply_page([], _page([1, 2, 3]), is_first_page=True)
    movies = apply_page(movies, _page([9, 8]), is_first_page=True)
    assert _ids(movies) == [9, 8]


def test_page_order_is_preserved_for_new_items():
    movies = apply_page([], _page([5, 1]), is_first_page=True)
    movies = apply_page(movies, _page([7, 1, 3, 5, 2], page=2), is_first_page=False)
    assert _ids(movies) == [5, 1, 7, 3, 2]


def test_duplicates_within_one_page_are_dropped():
    movies = apply_page([], _page([1]), is_first_page=True)
    movies = apply_page(movies, _page([2, 2, 3], page=2), is_first_page=False)
    assert _ids(movies) == [1, 2, 3]


def test_existing_list_is_not_mutated():
    first = apply_page([], _page([1, 2]), is_first_page=True)
    apply_page(first, _page([3], page=2), is_first_page=False)
    assert _ids(first) == [1, 2]


def test_many_pages_keep_first_seen_order():
    movies = []
    pages = [[1, 2, 3], [3, 4], [1, 5], [5, 6, 2]]
    for number, ids in enumerate(pages, start=1):
        movies = apply_page(movies, _page(ids, page=number, total_pages=4), is_first_page=number == 1)
    assert _ids(movies) == [1, 2, 3, 4, 5, 6]


def test_has_more():
    assert has_more(1, 3) is True
    assert has_more(3, 3) is False
    assert has_more(4, 3) is False
    assert has_more(1, 0) is False
