"""
Ordered movie index.
An unbalanced binary search tree keyed by each movie's sort key, stored as an
arena of nodes addressed by index. Traversals use an explicit stack so skewed
trees (sorted input) cannot exhaust the interpreter's recursion limit.
"""

from typing import Iterable, Iterator, List, Optional, Tuple  # type annotations

# Import our data classes for records, outcomes and errors
from .models import DuplicateKeyError, InsertResult, Movie  # core data classes

# Import loguru for console logging
from loguru import logger  # simple structured logger


class MovieTree:
	"""
	Binary search tree over Movie records.

	Node i lives at ``_movies[i]`` with children ``_left[i]`` / ``_right[i]``.
	Every key in a left subtree is strictly smaller than its parent's key and
	every key in a right subtree strictly larger; keys are unique. Nodes are
	only ever appended, never removed or rebalanced.

	Single-writer: insertions must be serialized. Once loading is finished,
	any number of readers may traverse or query concurrently.
	"""

	def __init__(self):
		self._movies: List[Movie] = []  # node payloads, indexed by node id
		self._left: List[Optional[int]] = []  # left child index per node
		self._right: List[Optional[int]] = []  # right child index per node
		self._root: Optional[int] = None  # None while the tree is empty

	@classmethod
	def from_movies(cls, movies: Iterable[Movie], skip_duplicates: bool = True) -> Tuple["MovieTree", List[InsertResult]]:
		"""
		Build a tree from an iterable of movies.
		Returns the tree and the list of rejected insertions. With
		skip_duplicates=False the first collision raises DuplicateKeyError.
		"""
		tree = cls()  # empty tree
		rejected: List[InsertResult] = []  # collisions reported back to the caller
		for movie in movies:
			if skip_duplicates:
				result = tree.try_insert(movie)  # never raises
				if not result.inserted:
					rejected.append(result)
			else:
				tree.insert(movie)  # propagates DuplicateKeyError
		logger.info(f"[Tree] Built tree with {len(tree)} movies ({len(rejected)} rejected)")
		return tree, rejected

	def __len__(self) -> int:
		return len(self._movies)

	def __iter__(self) -> Iterator[Movie]:
		return self.in_order()

	def __contains__(self, movie: Movie) -> bool:
		return self._locate(movie.sort_key)[0] is not None

	def _locate(self, sort_key: str) -> Tuple[Optional[int], Optional[int], int]:
		"""
		Walk from the root towards sort_key.
		Returns (matching node, parent of the empty slot, side) where side is -1
		for a left slot and 1 for a right slot. The match is None when the key
		is absent; the parent is None when the tree is empty.
		"""
		parent: Optional[int] = None
		side = 0
		node = self._root
		while node is not None:
			current = self._movies[node].sort_key
			if sort_key < current:
				parent, side, node = node, -1, self._left[node]
			elif sort_key > current:
				parent, side, node = node, 1, self._right[node]
			else:
				return node, parent, 0
		return None, parent, side

	def _attach(self, movie: Movie, parent: Optional[int], side: int) -> int:
		"""Append a new leaf node and link it under parent."""
		index = len(self._movies)  # next free arena slot
		self._movies.append(movie)
		self._left.append(None)
		self._right.append(None)
		if parent is None:
			self._root = index  # first node becomes the root
		elif side < 0:
			self._left[parent] = index
		else:
			self._right[parent] = index
		return index

	def insert(self, movie: Movie) -> None:
		"""
		Insert a movie, keeping the BST property.
		Raises DuplicateKeyError if its sort key is already present; the tree
		is left untouched in that case.
		"""
		match, parent, side = self._locate(movie.sort_key)
		if match is not None:
			raise DuplicateKeyError(movie, self._movies[match])
		index = self._attach(movie, parent, side)
		logger.debug(f"[Tree] Inserted '{movie.sort_key}' at node {index}")

	def try_insert(self, movie: Movie) -> InsertResult:
		"""Insert a movie, reporting a collision as a rejected result instead of raising."""
		try:
			self.insert(movie)
		except DuplicateKeyError as e:
			logger.debug(f"[Tree] Rejected '{movie.sort_key}': held by movie id {e.existing.movie_id}")
			return InsertResult.rejected(movie, str(e))
		return InsertResult.ok(movie)

	def find(self, sort_key: str) -> Optional[Movie]:
		"""Return the movie stored under sort_key, or None."""
		match = self._locate(sort_key)[0]
		return self._movies[match] if match is not None else None

	def in_order(self) -> Iterator[Movie]:
		"""
		Lazily yield movies in ascending sort-key order.
		Each call starts a fresh traversal.
		"""
		stack: List[int] = []  # nodes whose left side is done but which are not yet yielded
		node = self._root
		while stack or node is not None:
			while node is not None:  # slide down the left spine
				stack.append(node)
				node = self._left[node]
			node = stack.pop()
			yield self._movies[node]
			node = self._right[node]

	def range_subset(self, low: str, high: str) -> List[Movie]:
		"""
		Movies whose sort key lies in [low, high], ascending, without duplicates.
		Scans every node; subtrees outside the bounds are not skipped.
		"""
		selected = self._collect(self.in_order(), low, high)
		logger.debug(f"[Tree] range_subset('{low}', '{high}') matched {len(selected)} of {len(self)}")
		return selected

	def range_subset_pruned(self, low: str, high: str) -> List[Movie]:
		"""
		Same contents and order as range_subset, visiting only the nodes whose
		subtrees can overlap [low, high]: O(depth + k) instead of O(n).
		"""
		selected = self._collect(self._bounded_in_order(low, high), low, high)
		logger.debug(f"[Tree] range_subset_pruned('{low}', '{high}') matched {len(selected)} of {len(self)}")
		return selected

	def _bounded_in_order(self, low: str, high: str) -> Iterator[Movie]:
		stack: List[int] = []
		node = self._root
		while stack or node is not None:
			while node is not None:
				stack.append(node)
				# left subtree only holds keys below this one
				node = self._left[node] if low < self._movies[node].sort_key else None
			node = stack.pop()
			movie = self._movies[node]
			yield movie
			node = self._right[node] if movie.sort_key < high else None

	@staticmethod
	def _collect(movies: Iterable[Movie], low: str, high: str) -> List[Movie]:
		seen = set()  # movie equality is by identifier
		selected: List[Movie] = []
		for movie in movies:
			if movie.is_within_range(low, high) and movie not in seen:
				seen.add(movie)
				selected.append(movie)
		return selected

	def height(self) -> int:
		"""Number of nodes on the longest root-to-leaf path (0 when empty)."""
		if self._root is None:
			return 0
		deepest = 0
		stack: List[Tuple[int, int]] = [(self._root, 1)]  # (node, depth)
		while stack:
			node, depth = stack.pop()
			deepest = max(deepest, depth)
			for child in (self._left[node], self._right[node]):
				if child is not None:
					stack.append((child, depth + 1))
		return deepest

	def log_tree(self) -> None:
		"""Log every movie in order at debug level."""
		logger.debug(f"[Tree] {len(self)} movies, height {self.height()}")
		for movie in self.in_order():
			logger.debug(f"[Tree] {movie}")
