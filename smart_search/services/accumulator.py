# smart_search/services/accumulator.py

from typing import List, Sequence

from smart_search.schemas.movie import MovieSearchResponse, MovieSummary


def apply_page(
    existing: Sequence[MovieSummary],
    page: MovieSearchResponse,
    is_first_page: bool,
) -> List[MovieSummary]:
    """Merge one result page into the accumulated list.

    The first page replaces everything. Later pages only append movies whose
    id has not been seen yet, keeping the page's order; earlier items are
    never moved or dropped.
    """
    if is_first_page:
        return list(page.results)

    seen_ids = {movie.id for movie in existing}
    merged = list(existing)
    for movie in page.results:
        if movie.id not in seen_ids:
            seen_ids.add(movie.id)
            merged.append(movie)
    return merged


def has_more(page_number: int, total_pages: int) -> bool:
    return page_number < total_pages
