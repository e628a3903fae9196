# smart_search/constants/genres.py
"""
TMDB genre table and keyword lexicon.

Official genre IDs: https://developer.themoviedb.org/reference/genre-movie-list
The lexicon is built once at import and shared by the parser and the router.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from smart_search.schemas.genre import GenreEntry


class GenreIds:
    ACTION = 28
    ADVENTURE = 12
    ANIMATION = 16
    COMEDY = 35
    CRIME = 80
    DOCUMENTARY = 99
    DRAMA = 18
    FAMILY = 10751
    FANTASY = 14
    HISTORY = 36
    HORROR = 27
    MUSIC = 10402
    MYSTERY = 9648
    ROMANCE = 10749
    SCIENCE_FICTION = 878
    TV_MOVIE = 10770
    THRILLER = 53
    WAR = 10752
    WESTERN = 37


GENRE_TABLE: Tuple[Tuple[int, str, Tuple[str, ...]], ...] = (
    (GenreIds.ACTION, "Action", ("action", "action-packed", "fights", "fighting", "martial arts")),
    (GenreIds.ADVENTURE, "Adventure", ("adventure", "quest", "journey", "exploration")),
    (GenreIds.ANIMATION, "Animation", ("animation", "animated", "cartoon", "anime")),
    (GenreIds.COMEDY, "Comedy", ("comedy", "funny", "humor", "humorous", "laugh", "hilarious")),
    (GenreIds.CRIME, "Crime", ("crime", "criminal", "heist", "robbery", "detective", "mafia", "gangster")),
    (GenreIds.DOCUMENTARY, "Documentary", ("documentary", "doc", "real", "true story", "based on")),
    (GenreIds.DRAMA, "Drama", ("drama", "dramatic", "emotional", "serious")),
    (GenreIds.FAMILY, "Family", ("family", "kids", "children", "family-friendly")),
    (GenreIds.FANTASY, "Fantasy", ("fantasy", "magic", "magical", "wizard", "supernatural", "mythical")),
    (GenreIds.HISTORY, "History", ("history", "historical", "period", "era", "wwii", "war")),
    (GenreIds.HORROR, "Horror", ("horror", "scary", "terror", "terrifying", "zombie", "haunted", "ghost")),
    (GenreIds.MUSIC, "Music", ("music", "musical", "concert", "band", "singer")),
    (GenreIds.MYSTERY, "Mystery", ("mystery", "mysterious", "whodunit", "suspense")),
    (GenreIds.ROMANCE, "Romance", ("romance", "romantic", "love", "relationship", "dating")),
    (GenreIds.SCIENCE_FICTION, "Science Fiction", ("sci-fi", "science fiction", "scifi", "space", "alien", "future", "dystopia")),
    (GenreIds.TV_MOVIE, "TV Movie", ("tv movie", "television")),
    (GenreIds.THRILLER, "Thriller", ("thriller", "suspense", "intense", "gripping")),
    (GenreIds.WAR, "War", ("war", "military", "battle", "soldier", "combat")),
    (GenreIds.WESTERN, "Western", ("western", "cowboy", "wild west", "frontier")),
)


class GenreLexicon:
    """Immutable genre lookup table.

    Keyword membership may overlap between genres ("war" is both History and
    War, "suspense" both Mystery and Thriller). ``find_genres_in_text`` reports
    every match; ``get_genre_id`` resolves an overlapping keyword to the last
    declared genre.
    """

    def __init__(self, entries: Iterable[GenreEntry]):
        self._entries: Tuple[GenreEntry, ...] = tuple(entries)

        self._by_id: Dict[int, GenreEntry] = {}
        for entry in self._entries:
            if entry.id in self._by_id:
                raise ValueError(f"Duplicate genre id: {entry.id}")
            self._by_id[entry.id] = entry

        self._name_to_id: Dict[str, int] = {}
        for entry in self._entries:
            self._name_to_id[entry.name.lower()] = entry.id
            for keyword in entry.keywords:
                self._name_to_id[keyword] = entry.id

        # Canonical name first, then keywords; order within an entry does not
        # affect the result of a scan.
        self._scan_terms: Tuple[Tuple[int, Tuple[str, ...]], ...] = tuple(
            (entry.id, (entry.name.lower(),) + tuple(sorted(entry.keywords)))
            for entry in self._entries
        )

    @classmethod
    def from_table(cls, table: Iterable[Tuple[int, str, Iterable[str]]]) -> "GenreLexicon":
        return cls(GenreEntry(id=genre_id, name=name, keywords=keywords) for genre_id, name, keywords in table)

    @property
    def entries(self) -> Tuple[GenreEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[GenreEntry]:
        return iter(self._entries)

    def __contains__(self, genre_id: object) -> bool:
        return genre_id in self._by_id

    def get_genre_id(self, name: str) -> Optional[int]:
        """Case-insensitive exact lookup of a genre name or keyword"""
        if not name:
            return None
        return self._name_to_id.get(name.strip().lower())

    def get_genre(self, genre_id: int) -> Optional[GenreEntry]:
        return self._by_id.get(genre_id)

    def get_genre_name(self, genre_id: int) -> Optional[str]:
        entry = self._by_id.get(genre_id)
        return entry.name if entry else None

    def find_genres_in_text(self, text: str) -> List[int]:
        """All genres whose name or keyword occurs as a substring of ``text``.

        Matching is plain substring containment, not tokenized, so "war" also
        hits "warrior". Ids come back once each, in table order.
        """
        if not text:
            return []
        lower_text = text.lower()
        return [
            genre_id
            for genre_id, terms in self._scan_terms
            if any(term in lower_text for term in terms)
        ]


GENRE_LEXICON = GenreLexicon.from_table(GENRE_TABLE)
