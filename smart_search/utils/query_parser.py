# smart_search/utils/query_parser.py
"""
Smart query parser.

Turns free-text search input into structured Discover filters.

    "action 2020 rating>7" -> year=2020, min_rating=7.0, genres=["28"], use_discover=True

Extraction runs as an ordered fold over extractor functions. Each extractor
receives the text left over by the previous ones, so a token consumed as a
year is never seen again as a rating.
"""

import re
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from smart_search.constants.genres import GENRE_LEXICON, GenreLexicon
from smart_search.schemas.search import DiscoverParams, ParsedQuery

MIN_VOTE_COUNT = 100
DEFAULT_SORT = "popularity.desc"
MAX_RATING = 10.0

YEAR_PATTERN = re.compile(r"\b(?:19|20)\d{2}\b")

# Priority order matters: the first pattern that matches anywhere wins.
RATING_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"rating\s*[>=]+\s*(\d+\.?\d*)", re.I),
    re.compile(r"[>=]+\s*(\d+\.?\d*)\s*rating", re.I),
    re.compile(r"(\d+\.?\d*)\s*\+"),
    re.compile(r"[>=]\s*(\d+\.?\d*)"),
)

RUNTIME_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(r"runtime\s*[>=]+\s*(\d+)", re.I),
    re.compile(r"longer\s+than\s+(\d+)", re.I),
    re.compile(r"[>=]\s*(\d+)\s*min", re.I),
)

# Only these words are stripped after a genre match. Keyword synonyms
# ("zombie", "heist") stay in the title text.
GENRE_WORDS: Tuple[str, ...] = (
    "action",
    "adventure",
    "animation",
    "comedy",
    "crime",
    "documentary",
    "drama",
    "family",
    "fantasy",
    "history",
    "horror",
    "music",
    "mystery",
    "romance",
    "sci-fi",
    "science fiction",
    "thriller",
    "war",
    "western",
)
GENRE_WORD_PATTERNS: Tuple[re.Pattern[str], ...] = tuple(
    re.compile(rf"\b{re.escape(word)}\b", re.I) for word in GENRE_WORDS
)

Fields = Dict[str, Any]
Extractor = Callable[[str, Fields, GenreLexicon], Tuple[str, Fields]]


def _first_match(
    patterns: Sequence[re.Pattern[str]],
    text: str,
    accept: Callable[[re.Match[str]], bool] = lambda match: True,
) -> Optional[re.Match[str]]:
    # a rejected hit does not end the pattern; later hits of it are still tried
    for pattern in patterns:
        for match in pattern.finditer(text):
            if accept(match):
                return match
    return None


def _remove_match(match: re.Match[str], text: str) -> str:
    return (text[: match.start()] + text[match.end() :]).strip()


def extract_year(text: str, fields: Fields, lexicon: GenreLexicon) -> Tuple[str, Fields]:
    match = YEAR_PATTERN.search(text)
    if not match:
        return text, fields
    # First year wins, but every year token leaves the title text.
    remaining = YEAR_PATTERN.sub("", text).strip()
    return remaining, {**fields, "year": int(match.group(0)), "use_discover": True}


def _is_rating(match: re.Match[str]) -> bool:
    # ">120" is not a rating; leave it for the runtime patterns
    return float(match.group(1)) <= MAX_RATING


def extract_rating(text: str, fields: Fields, lexicon: GenreLexicon) -> Tuple[str, Fields]:
    match = _first_match(RATING_PATTERNS, text, accept=_is_rating)
    if not match:
        return text, fields
    rating = float(match.group(1))
    return _remove_match(match, text), {**fields, "min_rating": rating, "use_discover": True}


def extract_runtime(text: str, fields: Fields, lexicon: GenreLexicon) -> Tuple[str, Fields]:
    match = _first_match(RUNTIME_PATTERNS, text)
    if not match:
        return text, fields
    return _remove_match(match, text), {**fields, "min_runtime": int(match.group(1)), "use_discover": True}


def extract_genres(text: str, fields: Fields, lexicon: GenreLexicon) -> Tuple[str, Fields]:
    genre_ids = lexicon.find_genres_in_text(text)
    if not genre_ids:
        return text, fields
    remaining = text
    for pattern in GENRE_WORD_PATTERNS:
        remaining = pattern.sub("", remaining).strip()
    return remaining, {**fields, "genres": [str(genre_id) for genre_id in genre_ids], "use_discover": True}


EXTRACTORS: Tuple[Extractor, ...] = (
    extract_year,
    extract_rating,
    extract_runtime,
    extract_genres,
)


def parse_search_query(query: Optional[str], lexicon: GenreLexicon = GENRE_LEXICON) -> ParsedQuery:
    """Parse user input into structured filters. Never raises on odd input."""
    if not query or not query.strip():
        return ParsedQuery(use_discover=False)

    remaining = query.strip()
    fields: Fields = {"use_discover": False}
    for extractor in EXTRACTORS:
        remaining, fields = extractor(remaining, fields, lexicon)

    remaining = re.sub(r"\s+", " ", remaining).strip()
    if remaining:
        fields["text_query"] = remaining

    return ParsedQuery(**fields)


def to_discover_params(parsed: ParsedQuery) -> DiscoverParams:
    """Map parsed filters onto /discover/movie query parameters"""
    params: DiscoverParams = {}

    if parsed.year:
        params["primary_release_year"] = parsed.year

    if parsed.min_rating is not None:
        params["vote_average.gte"] = parsed.min_rating
        # Keeps single-vote 10/10 titles out of the top results
        params["vote_count.gte"] = MIN_VOTE_COUNT

    if parsed.max_rating is not None:
        params["vote_average.lte"] = parsed.max_rating

    if parsed.genres:
        params["with_genres"] = ",".join(parsed.genres)

    if parsed.min_runtime is not None:
        params["with_runtime.gte"] = parsed.min_runtime

    if parsed.max_runtime is not None:
        params["with_runtime.lte"] = parsed.max_runtime

    params["sort_by"] = DEFAULT_SORT

    return params


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def get_query_description(parsed: ParsedQuery) -> str:
    parts: List[str] = []

    if parsed.text_query:
        parts.append(f'"{parsed.text_query}"')

    if parsed.year:
        parts.append(f"from {parsed.year}")

    if parsed.genres:
        parts.append(f"genre: {', '.join(parsed.genres)}")

    if parsed.min_rating is not None:
        parts.append(f"rating ≥ {_format_number(parsed.min_rating)}")

    if parsed.max_rating is not None:
        parts.append(f"rating ≤ {_format_number(parsed.max_rating)}")

    if parsed.min_runtime is not None:
        parts.append(f"runtime ≥ {parsed.min_runtime} min")

    return ", ".join(parts) if parts else "All movies"
