"""
End-to-end tests: load -> build tree -> range query -> CSV export.
Run: python -m pytest tests/test_pipeline.py
"""

import csv
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from movie_catalog.exporter import CatalogExporter
from movie_catalog.models import Movie
from movie_catalog.pipeline import CatalogPipeline, RangeQuery


def read_rows(path):
	with open(path, newline="", encoding="utf-8") as f:
		return list(csv.reader(f))


@pytest.fixture
def pipeline(tmp_path):
	return CatalogPipeline(ROOT / "data" / "movies.csv", tmp_path / "output")


def test_build_tree_from_sample(pipeline):
	tree = pipeline.build_tree()
	assert len(tree) == 30
	assert pipeline.rejected == []
	ordered = [m.sort_key for m in tree]
	assert ordered == sorted(ordered)


def test_sample1_range(pipeline, tmp_path):
	movies = pipeline.run_query(RangeQuery("sample1", "Back to the Future", "Hulk"))
	titles = [m.raw_title for m in movies]
	assert titles[0] == "Back to the Future (1985)"
	assert "Hulk (2003)" not in titles  # "Hulk (2003) - 6534" sorts above "Hulk"
	assert "Heat (1995)" in titles
	rows = read_rows(tmp_path / "output" / "sample1.csv")
	assert rows[0] == ["Movie ID", "Title", "Genres"]
	assert rows[1] == ["1210", "Back to the Future (1985)", "Adventure|Comedy|Sci-Fi"]
	assert len(rows) == len(movies) + 1


def test_pruned_query_matches_full_scan(pipeline):
	full = pipeline.run_query(RangeQuery("full", "Catwalk", "Hoax"))
	pruned = pipeline.run_query(RangeQuery("pruned", "Catwalk", "Hoax", pruned=True))
	assert [m.sort_key for m in full] == [m.sort_key for m in pruned]


def test_run_returns_results_by_name(pipeline, tmp_path):
	results = pipeline.run([
		RangeQuery("sample2", "Toy Story", "Walking and Talking"),
		RangeQuery("empty", "Zz", "Zzz"),
	])
	assert [m.movie_id for m in results["sample2"]] == [1, 3114, 4]  # "Walking and Talking (1996) - 876" sorts above the bound
	assert results["empty"] == []
	assert read_rows(tmp_path / "output" / "empty.csv") == [["Movie ID", "Title", "Genres"]]


def test_duplicate_rows_are_reported_and_skipped(tmp_path):
	source = tmp_path / "movies.csv"
	source.write_text(
		"movieId,title,genres\n6,Heat (1995),Action\n6,Heat (1995),Crime\n7,Sabrina (1995),Comedy\n",
		encoding="utf-8",
	)
	pipeline = CatalogPipeline(source, tmp_path / "output")
	tree = pipeline.build_tree()
	assert len(tree) == 2
	assert len(pipeline.rejected) == 1
	assert "Heat (1995) - 6" in pipeline.rejected[0].reason
	assert tree.find("Heat (1995) - 6").genres == ("Action",)


def test_inverted_bounds_rejected():
	with pytest.raises(ValueError):
		RangeQuery("bad", "Z", "A")


def test_exporter_quotes_every_field(tmp_path):
	path = CatalogExporter().write_range_csv(
		tmp_path / "nested" / "out.csv",
		[Movie.from_fields(11, "American President, The (1995)", "Comedy|Drama")],
	)
	text = path.read_text(encoding="utf-8")
	assert text.splitlines()[0] == '"Movie ID","Title","Genres"'
	assert text.splitlines()[1] == '"11","American President, The (1995)","Comedy|Drama"'
