"""
Build the movie tree and export the sample range queries.

This script:
1) Loads movies from data/movies.csv (or $MOVIE_CATALOG_CSV)
2) Inserts them into the ordered tree, reporting and skipping duplicate keys
3) Logs the tree in order (debug level)
4) Runs the sample range queries and writes output/<name>.csv for each

Usage:
    python -m scripts.export_ranges
"""

import sys  # log level from the command line
import time  # measure step timings

from loguru import logger  # console logging

from movie_catalog.config import MOVIES_CSV, OUTPUT_DIR, SAMPLE_QUERIES  # paths and queries
from movie_catalog.pipeline import CatalogPipeline, RangeQuery  # load/build/query/export


def main(argv=None):
	argv = sys.argv[1:] if argv is None else argv
	if "--verbose" in argv:  # show per-movie tree dump
		logger.remove()
		logger.add(sys.stderr, level="DEBUG")

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Export Movie Ranges")
	logger.info("=" * 60)

	pipeline = CatalogPipeline(MOVIES_CSV, OUTPUT_DIR)  # configured locations

	# 1) Load data and build tree
	logger.info("[1/3] Loading movies and building tree...")
	t0 = time.time()  # start timer
	tree = pipeline.build_tree()
	logger.info(f"[OK] {len(tree)} movies indexed in {time.time() - t0:.2f}s ({len(pipeline.rejected)} duplicates skipped)")

	# 2) Dump tree
	logger.info("\n[2/3] Tree contents (debug level)...")
	tree.log_tree()

	# 3) Queries
	logger.info("\n[3/3] Running range queries...")
	queries = [RangeQuery(name, low, high) for name, low, high in SAMPLE_QUERIES]
	results = pipeline.run(queries)
	for name, movies in results.items():
		logger.info(f"[OK] {name}: {len(movies)} movies -> {OUTPUT_DIR / (name + '.csv')}")

	# Footer
	logger.info("\nAll done!")
	logger.info("=" * 60)
	return results


if __name__ == '__main__':
	main()  # invoke exporter
