from multiprocessing import Pool
from typing import Optional

from .sparse_matrix import SparseMatrix
from .constants import Operation, OPERATION_CODES
from .matrix_errors import DimensionMismatchError, InvalidOperationError, InvalidMultiplyMethodError


def _check_same_shape(a: SparseMatrix, b: SparseMatrix, operation: str) -> None:
    if a.rows != b.rows or a.cols != b.cols:
        raise DimensionMismatchError(operation, a.shape, b.shape)


def _accumulate(a: SparseMatrix, b: SparseMatrix, sign: int) -> SparseMatrix:
    # written for unequal shapes even though callers currently require equal ones
    result = SparseMatrix(max(a.rows, b.rows), max(a.cols, b.cols), config=a.config)

    for (i, j), v in a.data_store.items():
        result.set_element(i, j, v)
    for (i, j), v in b.data_store.items():
        result.set_element(i, j, result.get_element(i, j) + sign * v)

    return result


def add(a: SparseMatrix, b: SparseMatrix) -> SparseMatrix:
    """Element-wise sum of two matrices of the same shape.

    Sums that cancel to zero stay stored as explicit zeros unless the left
    operand's config prunes zeros.

    Raises:
        DimensionMismatchError: If the shapes differ.
    """
    _check_same_shape(a, b, Operation.ADD)
    return _accumulate(a, b, 1)


def subtract(a: SparseMatrix, b: SparseMatrix) -> SparseMatrix:
    """Element-wise difference a - b of two matrices of the same shape.

    Raises:
        DimensionMismatchError: If the shapes differ.
    """
    _check_same_shape(a, b, Operation.SUBTRACT)
    return _accumulate(a, b, -1)


def index_by_row(entries: list[tuple[int, int, int]]) -> dict[int, list[tuple[int, int]]]:
    """Group (row, col, value) triples into {row: [(col, value), ...]}."""
    by_row = dict()
    for r, c, v in entries:
        by_row.setdefault(r, []).append((c, v))
    return by_row


def multiply_naive_chunk(left_entries: list[tuple[int, int, int]], right_entries: list[tuple[int, int, int]]) -> dict[tuple[int, int], int]:
    """Cross every left entry with every right entry, keeping pairs whose inner indices match."""
    partial = dict()
    for r1, c1, v1 in left_entries:
        for r2, c2, v2 in right_entries:
            if c1 == r2:
                partial[(r1, c2)] = partial.get((r1, c2), 0) + v1 * v2
    return partial


def multiply_indexed_chunk(left_entries: list[tuple[int, int, int]], right_by_row: dict[int, list[tuple[int, int]]]) -> dict[tuple[int, int], int]:
    """Join left entries against the right operand's entries grouped by row."""
    partial = dict()
    for r1, c1, v1 in left_entries:
        for c2, v2 in right_by_row.get(c1, ()):
            partial[(r1, c2)] = partial.get((r1, c2), 0) + v1 * v2
    return partial


def _split_chunks(entries: list, n_chunks: int) -> list[list]:
    size = max(1, -(-len(entries) // n_chunks))
    return [entries[k:k + size] for k in range(0, len(entries), size)]


def multiply(a: SparseMatrix, b: SparseMatrix, method: Optional[str] = None, n_workers: int = 0) -> SparseMatrix:
    """Matrix product a @ b.

    Every pair of stored entries (r1, c1, v1) of a and (r2, c2, v2) of b with
    c1 == r2 contributes v1 * v2 to result position (r1, c2). Positions with no
    contributing pair are never stored.

    Args:
        a: Left operand, shape (p, q).
        b: Right operand, shape (q, r).
        method: 'naive' or 'indexed'. Defaults to a.config.multiply_method.
        n_workers: When greater than 1, a's entries are split across a process
            pool and the partial products are merged by accumulation.

    Returns:
        New SparseMatrix of shape (p, r).

    Raises:
        DimensionMismatchError: If a.cols != b.rows.
    """
    if a.cols != b.rows:
        raise DimensionMismatchError(Operation.MULTIPLY, a.shape, b.shape)
    if method is None:
        method = a.config.multiply_method

    left_entries = list(a.entries())
    right_entries = list(b.entries())
    if method == 'naive':
        worker, right_arg = multiply_naive_chunk, right_entries
    elif method == 'indexed':
        worker, right_arg = multiply_indexed_chunk, index_by_row(right_entries)
    else:
        raise InvalidMultiplyMethodError(method, ['naive', 'indexed'])

    if n_workers > 1 and len(left_entries) > 1:
        chunks = _split_chunks(left_entries, n_workers)
        with Pool(processes=n_workers) as pool:
            partials = pool.starmap(worker, [(chunk, right_arg) for chunk in chunks])
    else:
        partials = [worker(left_entries, right_arg)]

    result = SparseMatrix(a.rows, b.cols, config=a.config)
    for partial in partials:
        for (i, j), v in partial.items():
            result.add_at(i, j, v)
    return result


def compute_add(a: SparseMatrix, b: SparseMatrix) -> SparseMatrix:
    return add(a, b)


def compute_subtract(a: SparseMatrix, b: SparseMatrix) -> SparseMatrix:
    return subtract(a, b)


def compute_multiply(a: SparseMatrix, b: SparseMatrix, n_workers: int = 0) -> SparseMatrix:
    return multiply(a, b, n_workers=n_workers)


def resolve_operation(operation: str) -> str:
    """Map an operation name or menu code ('i', 'ii', 'iii') to the operation name."""
    valid = [Operation.ADD, Operation.SUBTRACT, Operation.MULTIPLY]
    key = operation.strip().lower() if isinstance(operation, str) else operation
    key = OPERATION_CODES.get(key, key)
    if key not in valid:
        raise InvalidOperationError(operation, valid + list(OPERATION_CODES.keys()))
    return key


def compute(a: SparseMatrix, b: SparseMatrix, operation: str, n_workers: int = 0) -> SparseMatrix:
    """Apply the named operation to a and b and return the new matrix."""
    operation = resolve_operation(operation)
    if operation == Operation.ADD:
        return compute_add(a, b)
    elif operation == Operation.SUBTRACT:
        return compute_subtract(a, b)
    return compute_multiply(a, b, n_workers=n_workers)
