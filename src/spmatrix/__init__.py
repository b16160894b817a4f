"""
Integer sparse matrices with a plain-text file format.

A dictionary-backed sparse matrix supporting element access, addition,
subtraction and multiplication, with a parser and serializer for the
rows=/cols=/(row, col, value) text format.
"""

__version__ = "0.1.0"

from .sparse_matrix import SparseMatrix
from .config import MatrixConfig
from .matrix_codec import from_text, to_text, load_matrix, save_matrix
from .arithmetic import add, subtract, multiply, compute, compute_add, compute_subtract, compute_multiply
from .calculator import MatrixCalculator
from .matrix_errors import (
    SparseMatrixError,
    MatrixConfigError,
    MatrixFormatError,
    MatrixIOError,
    MatrixNotFoundError,
    MatrixWriteError,
    MatrixIndexError,
    InvalidIndexError,
    OutOfBoundsError,
    NonIntegerValueError,
    DimensionMismatchError,
    InvalidOperationError,
)

__all__ = [
    "SparseMatrix",
    "MatrixConfig",
    "MatrixCalculator",
    "from_text",
    "to_text",
    "load_matrix",
    "save_matrix",
    "add",
    "subtract",
    "multiply",
    "compute",
    "compute_add",
    "compute_subtract",
    "compute_multiply",
    "SparseMatrixError",
    "MatrixConfigError",
    "MatrixFormatError",
    "MatrixIOError",
    "MatrixNotFoundError",
    "MatrixWriteError",
    "MatrixIndexError",
    "InvalidIndexError",
    "OutOfBoundsError",
    "NonIntegerValueError",
    "DimensionMismatchError",
    "InvalidOperationError",
]
