"""
Export module.
Writes range-query results to delimited files.
"""

import csv  # quoting constants for pandas
from pathlib import Path
from typing import Iterable

import pandas as pd

from loguru import logger

from .config import EXPORT_HEADER
from .models import Movie


class CatalogExporter:
	"""Writes movies as `Movie ID, Title, Genres` rows, every field quoted."""

	def write_range_csv(self, path, movies: Iterable[Movie]) -> Path:
		path = Path(path)
		path.parent.mkdir(parents=True, exist_ok=True)  # ensure exists

		rows = [movie.to_row() for movie in movies]
		df = pd.DataFrame(rows, columns=EXPORT_HEADER)  # header-only frame when empty
		df.to_csv(path, index=False, quoting=csv.QUOTE_ALL)

		logger.info(f"[Exporter] Wrote {len(rows)} movies to {path}")
		return path
