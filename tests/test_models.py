"""
Unit tests for the Movie record: sort key derivation, year parsing, equality and ranges.
Run: python -m pytest tests/test_models.py
"""

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from movie_catalog.models import DuplicateKeyError, InsertResult, Movie, UNKNOWN_YEAR


def test_sort_key_and_year_from_parenthesized_title():
	movie = Movie.from_fields(7, "Heat (1995)", "Action|Crime|Thriller")
	assert movie.sort_key == "Heat (1995) - 7"
	assert movie.year == 1995
	assert movie.has_known_year
	assert movie.genres == ("Action", "Crime", "Thriller")


def test_title_without_year_defaults_to_unknown():
	movie = Movie.from_fields(8, "Unknown Film", "Drama")
	assert movie.year == UNKNOWN_YEAR == 9999
	assert not movie.has_known_year
	assert movie.sort_key == "Unknown Film - 8"


def test_bare_trailing_year_is_parsed():
	assert Movie.from_fields(1, "Blade Runner 2049", "Sci-Fi").year == 2049


def test_year_is_read_from_trimmed_title_but_key_keeps_raw_title():
	movie = Movie.from_fields(3, "Casino (1995)  ", "Crime")
	assert movie.year == 1995
	assert movie.sort_key == "Casino (1995)   - 3"


def test_year_range_in_title_is_not_a_year():
	movie = Movie.from_fields(171749, "Death Note: Desu nôto (2006–2007)", "(no genres listed)")
	assert movie.year == UNKNOWN_YEAR
	assert movie.genres == ("(no genres listed)",)


def test_genres_keep_order_and_repeats():
	movie = Movie.from_fields(2, "Jumanji (1995)", "Fantasy|Adventure|Fantasy")
	assert movie.genres == ("Fantasy", "Adventure", "Fantasy")


def test_equality_follows_identifier_only():
	a = Movie.from_fields(5, "Alpha", "Drama")
	b = Movie.from_fields(5, "Completely Different", "Comedy")
	c = Movie.from_fields(6, "Alpha", "Drama")
	assert a == b
	assert hash(a) == hash(b)
	assert a != c
	assert len({a, b, c}) == 2


def test_compare_uses_sort_key():
	alpha = Movie.from_fields(9, "Alpha", "Drama")
	beta = Movie.from_fields(1, "Beta", "Drama")
	assert alpha.compare(beta) == -1
	assert beta.compare(alpha) == 1
	assert alpha.compare(Movie.from_fields(9, "Alpha", "Comedy")) == 0
	assert sorted([beta, alpha]) == [alpha, beta]


def test_is_within_range_is_inclusive():
	movie = Movie.from_fields(2, "Gamma", "Drama")
	assert movie.is_within_range("Gamma - 2", "Gamma - 2")
	assert movie.is_within_range("Ba", "Ha")
	assert not movie.is_within_range("Ha", "Zz")
	assert not movie.is_within_range("A", "Gamma")


def test_identifier_is_immutable():
	movie = Movie.from_fields(1, "Toy Story (1995)", "Animation")
	with pytest.raises(AttributeError):
		movie.movie_id = 2


def test_to_row_rejoins_genres():
	movie = Movie.from_fields(1, "Toy Story (1995)", "Adventure|Animation")
	assert movie.to_row() == ["1", "Toy Story (1995)", "Adventure|Animation"]


def test_duplicate_key_error_names_the_movie():
	movie = Movie.from_fields(1, "Alpha", "Drama")
	error = DuplicateKeyError(movie, movie)
	assert "Alpha - 1" in str(error)
	assert isinstance(error, ValueError)


def test_insert_result_constructors():
	movie = Movie.from_fields(1, "Alpha", "Drama")
	assert InsertResult.ok(movie).inserted
	rejected = InsertResult.rejected(movie, "Duplicate movie: Alpha - 1")
	assert not rejected.inserted
	assert rejected.reason == "Duplicate movie: Alpha - 1"


def test_sort_key_is_always_derived():
	movie = Movie(movie_id=1, raw_title="Alpha")
	assert movie.sort_key == "Alpha - 1"
	with pytest.raises(TypeError):
		Movie(movie_id=1, raw_title="Alpha", sort_key="Zulu")
	with pytest.raises(AttributeError):
		movie.sort_key = "Zulu"


def test_genres_cannot_be_mutated():
	movie = Movie.from_fields(1, "Alpha", "Drama")
	with pytest.raises(AttributeError):
		movie.genres.append("Comedy")
	assert Movie(movie_id=2, raw_title="Beta", genres=["Drama"]).genres == ("Drama",)


def test_non_ascii_digits_are_not_a_year():
	movie = Movie.from_fields(4, "Film (١٩٩٥)", "Drama")
	assert movie.year == UNKNOWN_YEAR
