from typing import Literal
from dataclasses import dataclass

from .matrix_errors import InvalidBoundsPolicyError, InvalidMultiplyMethodError


@dataclass
class MatrixConfig:
    """
    Configuration for a SparseMatrix.

    This class defines the policies a matrix applies to writes and the
    algorithm used when it is the left operand of a multiplication.
    """

    bounds_policy: Literal['grow', 'strict'] = 'grow'
    """Policy for writes outside the declared shape:
    - 'grow': silently grow rows/cols to fit the written index
    - 'strict': reject the write with an OutOfBoundsError
    """

    prune_zeros: bool = False
    """Whether writing 0 removes the entry instead of storing an explicit zero."""

    multiply_method: Literal['naive', 'indexed'] = 'indexed'
    """Algorithm for sparse matrix products:
    - 'naive': full cross product of both entry sets filtered on the inner index
    - 'indexed': join against the right operand's entries grouped by row
    """

    def validate(self) -> None:
        """Validate configuration parameters."""
        BOUNDS_POLICIES = ['grow', 'strict']
        MULTIPLY_METHODS = ['naive', 'indexed']

        if self.bounds_policy not in BOUNDS_POLICIES:
            raise InvalidBoundsPolicyError(self.bounds_policy, BOUNDS_POLICIES)
        if self.multiply_method not in MULTIPLY_METHODS:
            raise InvalidMultiplyMethodError(self.multiply_method, MULTIPLY_METHODS)
