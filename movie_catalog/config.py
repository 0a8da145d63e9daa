"""Paths and sample range queries for the movie catalog."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# ── Paths ────────────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent
DATA_DIR = PROJECT_ROOT / "data"
MOVIES_CSV = Path(os.getenv("MOVIE_CATALOG_CSV", str(DATA_DIR / "movies.csv")))
OUTPUT_DIR = Path(os.getenv("MOVIE_CATALOG_OUTPUT_DIR", str(PROJECT_ROOT / "output")))

# ── Export ───────────────────────────────────────────────────────────────────
EXPORT_HEADER = ["Movie ID", "Title", "Genres"]

# ── Sample queries (name, low, high) ─────────────────────────────────────────
SAMPLE_QUERIES = [
    ("sample1", "Back to the Future", "Hulk"),
    ("sample2", "Toy Story", "Walking and Talking"),
    ("sample3", "Catwalk", "Hoax"),
]

# ── API ──────────────────────────────────────────────────────────────────────
DEFAULT_LIST_LIMIT = 50  # /movies page size when no limit is given
