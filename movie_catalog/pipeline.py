"""
Pipeline module.
Loads the catalog, builds the ordered tree, runs range queries and exports the results.
"""

from dataclasses import dataclass  # lightweight containers for queries
from pathlib import Path  # output file paths
from typing import Dict, Iterable, List, Optional  # type annotations for clarity

# Import project modules for loading, indexing and writing
from .config import MOVIES_CSV, OUTPUT_DIR  # default locations
from .data_loader import CatalogLoader  # CSV ingestion
from .exporter import CatalogExporter  # CSV output
from .models import InsertResult, Movie  # core data classes
from .movie_tree import MovieTree  # ordered index

# Import loguru for console logging
from loguru import logger  # simple structured logger


@dataclass
class RangeQuery:
	name: str  # output file stem, e.g. "sample1"
	low: str  # inclusive lower bound on the sort key
	high: str  # inclusive upper bound on the sort key
	pruned: bool = False  # use the subtree-skipping variant

	def __post_init__(self):
		if self.low > self.high:
			raise ValueError(f"Range query '{self.name}' has low bound '{self.low}' above high bound '{self.high}'")


class CatalogPipeline:
	"""
	Drives a full run: load -> build tree -> query -> export.
	Duplicate sort keys are reported and skipped so one dirty row does not abort the load.
	"""
	def __init__(
		self,
		movies_path: Optional[Path] = None,  # CSV catalog, defaults to config
		output_dir: Optional[Path] = None,  # where query results are written
	):
		self.movies_path = Path(movies_path or MOVIES_CSV)
		self.output_dir = Path(output_dir or OUTPUT_DIR)
		self.loader = CatalogLoader()  # loader instance
		self.exporter = CatalogExporter()  # writer instance
		self.tree: Optional[MovieTree] = None  # set by build_tree()
		self.rejected: List[InsertResult] = []  # duplicate-key rejections from the last build

	def build_tree(self) -> MovieTree:
		"""Load the catalog and insert every movie, skipping duplicate keys."""
		movies = self.loader.load_movies_from_csv(self.movies_path)  # read dataset
		self.tree, self.rejected = MovieTree.from_movies(movies, skip_duplicates=True)
		for result in self.rejected:
			logger.warning(f"[Pipeline] Skipped movie id {result.movie.movie_id}: {result.reason}")
		logger.info(f"[Pipeline] Tree ready: {len(self.tree)} movies, height {self.tree.height()}")
		return self.tree

	def run_query(self, query: RangeQuery) -> List[Movie]:
		"""Answer one range query and write it to <output_dir>/<name>.csv."""
		if self.tree is None:
			self.build_tree()  # lazy build on first use
		if query.pruned:
			movies = self.tree.range_subset_pruned(query.low, query.high)
		else:
			movies = self.tree.range_subset(query.low, query.high)
		logger.info(f"[Pipeline] Query '{query.name}' ['{query.low}' .. '{query.high}'] -> {len(movies)} movies")
		self.exporter.write_range_csv(self.output_dir / f"{query.name}.csv", movies)
		return movies

	def run(self, queries: Iterable[RangeQuery]) -> Dict[str, List[Movie]]:
		"""Run every query in order and return results keyed by query name."""
		return {query.name: self.run_query(query) for query in queries}
