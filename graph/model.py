"""Edge store for accumulating identifier relationships before serialization."""

from typing import List, Optional, Set, Tuple


Edge = Tuple[str, str]


class EdgeStore:
    """
    Accumulates directed (source, target) edges between node identifiers.

    The store runs under one of two policies, fixed at construction:

    - unique: each distinct pair is kept once (set semantics).
    - multi: every insertion is kept, duplicates included (list semantics).

    A store is consumed by ``finalize()``; it cannot be used afterwards.
    """

    def __init__(self, multiple: bool = False):
        self._multiple = multiple
        self._unique: Optional[Set[Edge]] = None if multiple else set()
        self._multi: Optional[List[Edge]] = [] if multiple else None
        self._finalized = False

    @classmethod
    def unique(cls) -> "EdgeStore":
        """Create a deduplicating store."""
        return cls(multiple=False)

    @classmethod
    def multi(cls) -> "EdgeStore":
        """Create a store that keeps duplicate edges."""
        return cls(multiple=True)

    @property
    def multiple(self) -> bool:
        """Return True if duplicate edges are retained."""
        return self._multiple

    @property
    def finalized(self) -> bool:
        """Return True once the store has been consumed."""
        return self._finalized

    def insert(self, source: str, target: str) -> None:
        """
        Add a directed edge from source to target.

        Under the unique policy, inserting a pair that is already present
        is a no-op.
        """
        self._check_open()

        if self._multiple:
            self._multi.append((source, target))
        else:
            self._unique.add((source, target))

    def finalize(self) -> List[Edge]:
        """
        Consume the store and return its canonical edge sequence.

        Edges are sorted ascending by source, then by target. Under the
        multi policy equal pairs appear once per insertion.

        Returns:
            Sorted list of (source, target) tuples.

        Raises:
            RuntimeError: If the store was already finalized.
        """
        self._check_open()

        if self._multiple:
            edges = sorted(self._multi)
        else:
            edges = sorted(self._unique)

        self._unique = None
        self._multi = None
        self._finalized = True

        return edges

    def _check_open(self) -> None:
        if self._finalized:
            raise RuntimeError("EdgeStore has already been finalized")

    def __len__(self) -> int:
        """Return the number of stored edges."""
        self._check_open()
        if self._multiple:
            return len(self._multi)
        return len(self._unique)

    def __repr__(self) -> str:
        policy = "multi" if self._multiple else "unique"
        if self._finalized:
            return f"EdgeStore(policy={policy}, finalized=True)"
        return f"EdgeStore(policy={policy}, edges={len(self)})"
