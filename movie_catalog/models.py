"""
Data models for the Movie Catalog.
Defines the movie record, the insertion outcome, and the duplicate-key error.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Regex for pulling the release year out of the title
import re  # trailing "(YYYY)" or bare "YYYY"
# Import typing helpers for precise and self-documenting types
from typing import List, Optional, Tuple  # lists, tuples and optional values


UNKNOWN_YEAR = 9999  # sentinel year when the title carries none
SORT_KEY_SEPARATOR = " - "  # joins raw title and identifier into the sort key
GENRE_DELIMITER = "|"  # genres arrive as "Comedy|Drama"

# "<anything><space>(1995)" or "<anything><space>1995", matched on the trimmed title
TITLE_YEAR_PATTERN = re.compile(r"^(.+)\s\(?(\d{4})\)?$", re.ASCII)  # ASCII digits only


@dataclass(frozen=True, eq=False)
class Movie:
	"""
	Represents a single catalog entry.
	Equality follows the identifier; ordering follows the derived sort key.
	"""
	movie_id: int  # unique identifier from the catalog
	raw_title: str  # title exactly as it appeared in the input row
	sort_key: str = field(init=False)  # "<raw_title> - <movie_id>", derived in __post_init__
	year: int = UNKNOWN_YEAR  # release year, UNKNOWN_YEAR when not parseable
	genres: Tuple[str, ...] = ()  # genre tags in input order

	def __post_init__(self):
		# frozen: set derived fields through object.__setattr__
		object.__setattr__(self, "sort_key", f"{self.raw_title}{SORT_KEY_SEPARATOR}{self.movie_id}")  # identifier disambiguates equal titles
		object.__setattr__(self, "genres", tuple(self.genres))

	@classmethod
	def from_fields(cls, movie_id: int, raw_title: str, genre_field: str) -> "Movie":
		"""
		Build a Movie from the three raw input fields.
		The year is best-effort: a title without a trailing year gets UNKNOWN_YEAR.
		"""
		match = TITLE_YEAR_PATTERN.match(raw_title.strip())  # look for the year suffix
		year = int(match.group(2)) if match else UNKNOWN_YEAR  # silent default
		return cls(
			movie_id=movie_id,
			raw_title=raw_title,
			year=year,
			genres=tuple(genre_field.split(GENRE_DELIMITER)),
		)

	@property
	def has_known_year(self) -> bool:
		return self.year != UNKNOWN_YEAR

	def compare(self, other: "Movie") -> int:
		"""Three-way comparison of sort keys: -1, 0 or 1."""
		if self.sort_key < other.sort_key:
			return -1
		if self.sort_key > other.sort_key:
			return 1
		return 0

	def is_within_range(self, low: str, high: str) -> bool:
		"""True when low <= sort_key <= high (both bounds inclusive)."""
		return low <= self.sort_key <= high

	def to_row(self) -> List[str]:
		"""Serialize as [id, title, genres] for delimited output."""
		return [str(self.movie_id), self.raw_title, GENRE_DELIMITER.join(self.genres)]

	def __eq__(self, other):
		if not isinstance(other, Movie):
			return NotImplemented
		return self.movie_id == other.movie_id

	def __hash__(self):
		return hash(self.movie_id)

	def __lt__(self, other: "Movie") -> bool:
		return self.compare(other) < 0

	def __str__(self):
		return self.sort_key


class DuplicateKeyError(ValueError):
	"""Raised when a movie's sort key is already present in the tree."""

	def __init__(self, movie: Movie, existing: Movie):
		self.movie = movie  # the movie that was rejected
		self.existing = existing  # the movie already holding the key
		super().__init__(f"Duplicate movie: {movie.sort_key}")


@dataclass
class InsertResult:
	"""
	Outcome of a non-raising insertion.
	Lets the caller choose between aborting a load and reporting-then-skipping.
	"""
	inserted: bool  # True when the movie is now in the tree
	movie: Movie  # the movie that was offered
	reason: Optional[str] = None  # why it was rejected, if it was

	@classmethod
	def ok(cls, movie: Movie) -> "InsertResult":
		return cls(inserted=True, movie=movie)

	@classmethod
	def rejected(cls, movie: Movie, reason: str) -> "InsertResult":
		return cls(inserted=False, movie=movie, reason=reason)
