"""
Data loading module.
Reads the movie catalog from a delimited file and turns each well-formed row into a Movie.
"""

# Standard libs for regex, typing and paths
import re  # identifier validation
from typing import List, Optional  # type hints
from pathlib import Path  # filesystem-safe paths

# pandas handles quoting and embedded delimiters in titles
import pandas as pd  # delimited file reader

# Import our Movie data class used across the project
from .models import Movie  # structured movie record

# Console logging
from loguru import logger  # console logger


EXPECTED_FIELDS = 3  # movieId, title, genres
MOVIE_ID_PATTERN = re.compile(r"[+-]?[0-9]+")  # plain ASCII integer, optional sign


class CatalogLoader:
	"""
	Loads movies from a CSV file with a header row and three fields per row.
	Malformed rows are logged and skipped; only clean data reaches Movie.from_fields.
	"""

	def __init__(self):
		"""Start with an empty rejection report."""
		self.rejected_rows: List[dict] = []  # {"row": ..., "reason": ...} for each skipped row

	def load_movies_from_csv(self, filepath) -> List[Movie]:
		"""
		Load movies from a CSV file (header row skipped).
		Returns a list of Movie objects in file order.
		"""
		filepath = Path(filepath)  # normalize path
		self.rejected_rows = []  # fresh report per load

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Movie data file not found: {filepath}")

		logger.info(f"[Loader] Loading movies from {filepath}...")  # log action

		# Everything as text: identifiers are validated here, not coerced by pandas
		df = pd.read_csv(
			filepath,
			dtype=str,
			keep_default_na=False,  # a literal "NA" title stays a title
			index_col=False,  # never infer an index from a long first row
			engine="python",  # required for a callable on_bad_lines
			on_bad_lines=self._reject_long_row,  # rows with too many fields
		)
		if len(df.columns) != EXPECTED_FIELDS:
			raise ValueError(f"Expected {EXPECTED_FIELDS} columns in {filepath}, found {len(df.columns)}")

		movies = []  # accumulator for parsed Movie objects
		for fields in df.itertuples(index=False, name=None):
			movie = self._parse_row(list(fields))  # None when the row is malformed
			if movie is not None:
				movies.append(movie)

		if self.rejected_rows:
			logger.warning(f"[Loader] Skipped {len(self.rejected_rows)} malformed rows")
		logger.info(f"[Loader] Successfully loaded {len(movies)} movies.")  # summary
		return movies  # return list

	def _reject_long_row(self, fields: List[str]) -> None:
		self._reject(fields, f"expected {EXPECTED_FIELDS} fields, found {len(fields)}")
		return None  # tells pandas to drop the line

	def _reject(self, fields: List, reason: str) -> None:
		logger.warning(f"[Loader] Skipping row {fields}: {reason}")
		self.rejected_rows.append({"row": fields, "reason": reason})

	def _parse_row(self, fields: List) -> Optional[Movie]:
		"""
		Validate one row and convert it into a Movie.
		Short rows come back from pandas padded with NaN.
		"""
		if any(pd.isna(value) for value in fields):
			self._reject(fields, f"expected {EXPECTED_FIELDS} fields, found fewer")
			return None

		raw_id, raw_title, genre_field = fields
		if not MOVIE_ID_PATTERN.fullmatch(raw_id.strip()):  # rejects "1_000", "1.0", non-ASCII digits
			self._reject(fields, f"movie id '{raw_id}' is not an integer")
			return None
		movie_id = int(raw_id.strip())

		movie = Movie.from_fields(movie_id, raw_title, genre_field)
		if not movie.has_known_year:
			logger.debug(f"[Loader] No release year in title '{raw_title}' (id {movie_id})")
		return movie
