"""
FastAPI server exposing the movie range index.
Endpoints:
- GET /health: basic health check
- GET /movies?limit=50: movies in ascending sort-key order
- GET /range?low=...&high=...&pruned=false: movies whose sort key lies in [low, high]

Startup loads the catalog CSV and builds the tree once; requests only read it.
"""

# Import standard libraries for timing
import time  # measure startup and request latencies
from typing import List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Query  # FastAPI primitives
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for loading and indexing
from movie_catalog.config import DEFAULT_LIST_LIMIT, MOVIES_CSV  # configured catalog path
from movie_catalog.models import Movie  # record type
from movie_catalog.movie_tree import MovieTree  # ordered index
from movie_catalog.pipeline import CatalogPipeline  # load + build

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Catalog Range API", version="1.0.0")  # web app

# Globals that hold the tree and measured startup time
TREE: Optional[MovieTree] = None  # populated by the startup hook
REJECTED_COUNT: int = 0  # duplicate keys skipped while building
STARTUP_TIME_S: float = 0.0  # measures how long startup took


# Pydantic model that describes the shape of a single movie in responses
class MovieOut(BaseModel):
	id: int  # unique id
	title: str  # title as given in the catalog
	sort_key: str  # "<title> - <id>"
	year: Optional[int] = None  # None when the title carries no year
	genres: List[str]  # genre tags in catalog order


# Pydantic model for a list of movies with timing
class MoviesResponse(BaseModel):
	count: int  # number of movies returned
	elapsed_ms: float  # server-side time in ms
	movies: List[MovieOut]  # ascending by sort key


# Pydantic model for a range query response
class RangeResponse(MoviesResponse):
	low: str  # inclusive lower bound
	high: str  # inclusive upper bound
	pruned: bool  # whether the subtree-skipping scan was used


def to_movie_out(movie: Movie) -> MovieOut:
	return MovieOut(
		id=movie.movie_id,
		title=movie.raw_title,
		sort_key=movie.sort_key,
		year=movie.year if movie.has_known_year else None,
		genres=list(movie.genres),
	)


# FastAPI startup hook to build the tree once
@app.on_event("startup")
async def startup_event():
	"""Load the catalog and build the tree before serving requests."""
	global TREE, REJECTED_COUNT, STARTUP_TIME_S  # refer to module-level globals
	start = time.time()  # start timer for startup latency

	logger.info(f"[API] Startup: building tree from {MOVIES_CSV}...")  # log intent
	pipeline = CatalogPipeline(movies_path=MOVIES_CSV)
	TREE = pipeline.build_tree()
	REJECTED_COUNT = len(pipeline.rejected)

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s with {len(TREE)} movies.")  # summary log


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"tree_ready": TREE is not None,  # True once startup finished
		"movies": len(TREE) if TREE is not None else 0,  # indexed movies
		"rejected": REJECTED_COUNT,  # duplicate keys skipped
		"startup_seconds": round(STARTUP_TIME_S, 2)  # startup latency
	}


@app.get("/movies", response_model=MoviesResponse)
async def list_movies(limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, description="Maximum movies to return")):
	"""First `limit` movies in ascending sort-key order."""
	if TREE is None:
		logger.warning("[API] /movies requested but tree not built")  # guard log
		return MoviesResponse(count=0, elapsed_ms=0.0, movies=[])

	start = time.time()
	items: List[MovieOut] = []
	for movie in TREE.in_order():
		if len(items) >= limit:
			break
		items.append(to_movie_out(movie))
	elapsed_ms = (time.time() - start) * 1000
	return MoviesResponse(count=len(items), elapsed_ms=round(elapsed_ms, 2), movies=items)


@app.get("/range", response_model=RangeResponse)
async def range_query(
	low: str = Query(..., description="Inclusive lower bound on the sort key"),
	high: str = Query(..., description="Inclusive upper bound on the sort key"),
	pruned: bool = False,
):
	"""Movies whose sort key lies within [low, high]."""
	if low > high:
		raise HTTPException(status_code=400, detail=f"low bound '{low}' is above high bound '{high}'")
	if TREE is None:
		logger.warning("[API] /range requested but tree not built")  # guard log
		return RangeResponse(low=low, high=high, pruned=pruned, count=0, elapsed_ms=0.0, movies=[])

	start = time.time()  # start timer
	logger.debug(f"[API] /range low='{low}' high='{high}' pruned={pruned}")  # debug log of input
	movies = TREE.range_subset_pruned(low, high) if pruned else TREE.range_subset(low, high)
	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /range served {len(movies)} movies in {elapsed_ms:.2f} ms")  # summary

	return RangeResponse(
		low=low,
		high=high,
		pruned=pruned,
		count=len(movies),
		elapsed_ms=round(elapsed_ms, 2),
		movies=[to_movie_out(m) for m in movies],
	)
