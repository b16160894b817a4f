from .constants import Operation

OPERATION_NOUNS = {
    Operation.ADD: "addition",
    Operation.SUBTRACT: "subtraction",
    Operation.MULTIPLY: "multiplication",
}


class SparseMatrixError(Exception):
    """Base class for all sparse matrix errors."""
    pass

class MatrixConfigError(SparseMatrixError, ValueError):
    """Base class for sparse matrix configuration errors."""
    pass

class MatrixIndexError(SparseMatrixError, IndexError):
    """Base class for sparse matrix index errors."""
    pass

class MatrixIOError(SparseMatrixError, OSError):
    """Base class for sparse matrix file errors."""
    pass



class InvalidBoundsPolicyError(MatrixConfigError):
    """Raised when an invalid bounds policy is provided."""

    def __init__(self, policy: str, valid_policies: list):
        self.policy = policy
        self.valid_policies = valid_policies
        message = f"Invalid bounds policy '{policy}'. Must be one of: {valid_policies}"
        super().__init__(message)


class InvalidMultiplyMethodError(MatrixConfigError):
    """Raised when an invalid multiplication method is provided."""

    def __init__(self, method: str, valid_methods: list):
        self.method = method
        self.valid_methods = valid_methods
        message = f"Invalid multiply method '{method}'. Must be one of: {valid_methods}"
        super().__init__(message)


class InvalidOperationError(MatrixConfigError):
    """Raised when an operation selector does not name a known operation."""

    def __init__(self, operation: str, valid_operations: list = None):
        self.operation = operation
        self.valid_operations = valid_operations
        if valid_operations is None:
            message = f"Invalid operation '{operation}'. "
        else:
            message = f"Invalid operation '{operation}'. Must be one of: {valid_operations}"
        super().__init__(message)


class MatrixFormatError(SparseMatrixError, ValueError):
    """Raised when matrix text does not follow the rows=/cols=/(r, c, v) format."""

    def __init__(self, reason: str, source: str = None, line_number: int = None, line: str = None):
        self.reason = reason
        self.source = source
        self.line_number = line_number
        self.line = line

        message = reason
        if source is not None:
            message += f" in {source}"
        if line_number is not None:
            message += f" at line {line_number}"
        if line is not None:
            message += f": {line!r}"
        super().__init__(message)


class DimensionMismatchError(SparseMatrixError, ValueError):
    """Raised when two matrices have incompatible shapes for an operation."""

    def __init__(self, operation: str, left_shape: tuple[int, int], right_shape: tuple[int, int]):
        self.operation = operation
        self.left_shape = left_shape
        self.right_shape = right_shape

        if operation == Operation.MULTIPLY:
            message = (
                f"Invalid dimensions for multiplication. First matrix columns ({left_shape[1]}) "
                f"must match second matrix rows ({right_shape[0]})"
            )
        else:
            message = (
                f"Matrix dimensions do not match for {OPERATION_NOUNS.get(operation, operation)}. "
                f"First matrix is {left_shape[0]}x{left_shape[1]} and second matrix is {right_shape[0]}x{right_shape[1]}"
            )
        super().__init__(message)


class InvalidIndexError(MatrixIndexError):
    """Raised when a row/column index or a dimension is negative."""

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        message = f"Matrix indices must be non-negative, got ({row}, {col})"
        super().__init__(message)


class OutOfBoundsError(MatrixIndexError):
    """Raised by strict matrices when a write falls outside the declared shape."""

    def __init__(self, row: int, col: int, shape: tuple[int, int]):
        self.row = row
        self.col = col
        self.shape = shape
        message = f"Position ({row}, {col}) is outside the {shape[0]}x{shape[1]} matrix"
        super().__init__(message)


class NonIntegerValueError(SparseMatrixError, TypeError):
    """Raised when a non-integer value is written into a matrix."""

    def __init__(self, value):
        self.value = value
        message = f"Sparse matrix values must be integers, got {type(value).__name__}: {value!r}"
        super().__init__(message)


class MatrixNotFoundError(MatrixIOError):
    """Raised when a matrix file does not exist or cannot be read."""

    def __init__(self, path: str):
        self.path = path
        message = f"File not found: {path}"
        super().__init__(message)


class MatrixWriteError(MatrixIOError):
    """Raised when a matrix file cannot be written."""

    def __init__(self, path: str, reason: str = ""):
        self.path = path
        self.reason = reason
        message = f"Failed to write matrix to {path}{f': {reason}' if reason else ''}"
        super().__init__(message)
