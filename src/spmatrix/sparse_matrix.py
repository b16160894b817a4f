import operator
import numpy as np
import pandas as pd
from scipy.sparse import coo_matrix
from dataclasses import dataclass, field, replace
from typing import Iterator, Optional

from .config import MatrixConfig
from .constants import ElementColumn
from .matrix_errors import InvalidIndexError, OutOfBoundsError, NonIntegerValueError


def _as_int(value) -> int:
    # bool is an int subclass but never a matrix value
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise NonIntegerValueError(value)
    return int(value)


@dataclass(eq=False)
class SparseMatrix:
    """Integer matrix storing only recorded entries, keyed by (row, col).

    Positions without a recorded entry read as 0. The declared shape is an
    initial hint: under the default 'grow' bounds policy a write past it
    extends rows/cols to fit.
    """
    rows: int = 0
    cols: int = 0
    data_store: dict[tuple[int, int], int] = field(default_factory=dict)
    config: MatrixConfig = field(default_factory=MatrixConfig)

    def __post_init__(self) -> None:
        self.config.validate()
        self.rows = operator.index(self.rows)
        self.cols = operator.index(self.cols)
        if self.rows < 0 or self.cols < 0:
            raise InvalidIndexError(self.rows, self.cols)

        # route any initial entries through set_element so they are validated
        initial = self.data_store
        self.data_store = {}
        for (i, j), v in initial.items():
            self.set_element(i, j, v)

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    @property
    def nnz(self) -> int:
        """Number of stored entries, explicit zeros included."""
        return len(self.data_store)

    def get_element(self, row: int, col: int) -> int:
        """Get the value at position (row, col), or 0 if nothing is stored there.

        Lookups never fail, including outside the declared shape.
        """
        return self.data_store.get((row, col), 0)

    def set_element(self, row: int, col: int, value: int) -> None:
        """Set the value at position (row, col), overwriting any prior value.

        Args:
            row: Non-negative row index.
            col: Non-negative column index.
            value: Integer value to store.

        Raises:
            InvalidIndexError: If row or col is negative.
            NonIntegerValueError: If value is not an integer.
            OutOfBoundsError: If the position is outside the shape and the
                bounds policy is 'strict'.
        """
        row = operator.index(row)
        col = operator.index(col)
        if row < 0 or col < 0:
            raise InvalidIndexError(row, col)
        value = _as_int(value)

        if row >= self.rows or col >= self.cols:
            if self.config.bounds_policy == 'strict':
                raise OutOfBoundsError(row, col, self.shape)
            self.rows = max(self.rows, row + 1)
            self.cols = max(self.cols, col + 1)

        if value == 0 and self.config.prune_zeros:
            self.data_store.pop((row, col), None)
        else:
            self.data_store[(row, col)] = value

    def add_at(self, row: int, col: int, value: int) -> None:
        """Add a value to the element at position (row, col)."""
        self.set_element(row, col, self.get_element(row, col) + _as_int(value))

    def __getitem__(self, key) -> int:
        if isinstance(key, tuple) and len(key) == 2:
            i, j = key
        else:
            raise KeyError("SparseMatrix indices must be a tuple of length 2")
        return self.get_element(i, j)

    def __setitem__(self, key, value: int) -> None:
        if isinstance(key, tuple) and len(key) == 2:
            i, j = key
        else:
            raise KeyError("SparseMatrix indices must be a tuple of length 2")
        self.set_element(i, j, value)

    def __delitem__(self, key) -> None:
        """Deletes the entry at position (i, j). The shape is left unchanged."""
        if isinstance(key, tuple) and len(key) == 2:
            i, j = key
        else:
            raise KeyError("SparseMatrix indices must be a tuple of length 2")
        self.data_store.pop((i, j), None)

    def __contains__(self, key) -> bool:
        """Checks if an entry is stored at position (i, j)."""
        if isinstance(key, tuple) and len(key) == 2:
            return key in self.data_store
        return False

    def __len__(self) -> int:
        return len(self.data_store)

    def __iter__(self) -> Iterator[tuple[int, int]]:
        """Iterates over stored positions in ascending (row, col) order."""
        return iter(self.keys())

    def keys(self) -> list[tuple[int, int]]:
        """Returns the stored positions in ascending (row, col) order."""
        return sorted(self.data_store.keys())

    def values(self) -> list[int]:
        """Returns the stored values in position order."""
        return [self.data_store[k] for k in self.keys()]

    def items(self) -> list[tuple[tuple[int, int], int]]:
        """Returns a list of ((row, col), value) pairs in position order."""
        return sorted(self.data_store.items())

    def entries(self) -> Iterator[tuple[int, int, int]]:
        """Yields (row, col, value) triples in position order."""
        for (i, j), v in self.items():
            yield i, j, v

    def __eq__(self, other) -> bool:
        """Two matrices are equal when their shapes and every value read back match.

        An explicitly stored zero compares equal to an absent entry; use
        stored_equal() to compare the stored entries exactly.
        """
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        mine = {k: v for k, v in self.data_store.items() if v != 0}
        theirs = {k: v for k, v in other.data_store.items() if v != 0}
        return mine == theirs

    def stored_equal(self, other: 'SparseMatrix') -> bool:
        """Returns True when shape and the exact stored mapping match."""
        return self.shape == other.shape and self.data_store == other.data_store

    def __repr__(self) -> str:
        """String representation of the matrix."""
        if not self.data_store:
            return f"SparseMatrix({self.rows}x{self.cols}, {{}})"
        items_str = ", ".join(f"{k}: {v}" for k, v in self.items())
        return f"SparseMatrix({self.rows}x{self.cols}, {{{items_str}}})"

    def clear(self) -> None:
        """Removes all elements from the matrix. The shape is kept."""
        self.data_store.clear()

    def copy(self) -> 'SparseMatrix':
        """Returns a copy of the matrix sharing neither storage nor config with the original."""
        result = SparseMatrix(self.rows, self.cols, config=replace(self.config))
        result.data_store = self.data_store.copy()
        return result

    def _coordinate_arrays(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        items = self.items()
        n = len(items)
        row_idx = np.fromiter((k[0] for k, _ in items), dtype=np.int64, count=n)
        col_idx = np.fromiter((k[1] for k, _ in items), dtype=np.int64, count=n)
        vals = np.fromiter((v for _, v in items), dtype=np.int64, count=n)
        return row_idx, col_idx, vals

    def to_dense(self) -> np.ndarray:
        """Returns the matrix as a (rows, cols) int64 numpy array."""
        dense = np.zeros(self.shape, dtype=np.int64)
        row_idx, col_idx, vals = self._coordinate_arrays()
        dense[row_idx, col_idx] = vals
        return dense

    def to_scipy(self) -> coo_matrix:
        """Returns the stored entries as a scipy COO matrix of the same shape."""
        row_idx, col_idx, vals = self._coordinate_arrays()
        return coo_matrix((vals, (row_idx, col_idx)), shape=self.shape, dtype=np.int64)

    def to_frame(self) -> pd.DataFrame:
        """Returns the stored entries as a DataFrame with row, col and value columns."""
        row_idx, col_idx, vals = self._coordinate_arrays()
        return pd.DataFrame({
            ElementColumn.ROW: row_idx,
            ElementColumn.COL: col_idx,
            ElementColumn.VALUE: vals,
        })

    @classmethod
    def from_dense(cls, array, config: Optional[MatrixConfig] = None) -> 'SparseMatrix':
        """Builds a matrix from a 2-D integer array, recording every non-zero cell."""
        arr = np.asarray(array)
        if arr.ndim != 2:
            raise ValueError(f"Expected a 2-D array, got {arr.ndim} dimensions")
        if arr.size > 0 and not np.issubdtype(arr.dtype, np.integer):
            raise NonIntegerValueError(arr.dtype)

        result = cls(arr.shape[0], arr.shape[1], config=config if config is not None else MatrixConfig())
        for i, j in zip(*np.nonzero(arr)):
            result.set_element(int(i), int(j), int(arr[i, j]))
        return result

    @classmethod
    def from_scipy(cls, matrix, config: Optional[MatrixConfig] = None) -> 'SparseMatrix':
        """Builds a matrix from any scipy sparse matrix, summing duplicate coordinates."""
        coo = matrix.tocoo()
        if coo.nnz > 0 and not np.issubdtype(coo.dtype, np.integer):
            raise NonIntegerValueError(coo.dtype)

        result = cls(coo.shape[0], coo.shape[1], config=config if config is not None else MatrixConfig())
        for i, j, v in zip(coo.row, coo.col, coo.data):
            result.add_at(int(i), int(j), int(v))
        return result

    @classmethod
    def from_frame(cls, df: pd.DataFrame, rows: Optional[int] = None, cols: Optional[int] = None,
                   config: Optional[MatrixConfig] = None) -> 'SparseMatrix':
        """Builds a matrix from a DataFrame of row, col and value columns.

        Missing dimensions start at 0 and grow with the written entries.
        """
        for col in [ElementColumn.ROW, ElementColumn.COL, ElementColumn.VALUE]:
            assert col in df.columns, f"Column \"{col}\" not found in element frame"

        result = cls(rows or 0, cols or 0, config=config if config is not None else MatrixConfig())
        for i, j, v in zip(df[ElementColumn.ROW], df[ElementColumn.COL], df[ElementColumn.VALUE]):
            result.set_element(i, j, v)
        return result
