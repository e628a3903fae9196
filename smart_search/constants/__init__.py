# smart_search/constants/__init__.py

from .genres import GENRE_LEXICON, GENRE_TABLE, GenreIds, GenreLexicon

__all__ = ["GENRE_LEXICON", "GENRE_TABLE", "GenreIds", "GenreLexicon"]
