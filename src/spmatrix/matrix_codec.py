import re
from typing import Optional

from .config import MatrixConfig
from .constants import ROWS_KEY, COLS_KEY
from .sparse_matrix import SparseMatrix
from .matrix_errors import MatrixFormatError, MatrixIndexError, MatrixNotFoundError, MatrixWriteError


ROWS_PATTERN = re.compile(rf"{ROWS_KEY}=(\d+)", re.ASCII)
COLS_PATTERN = re.compile(rf"{COLS_KEY}=(\d+)", re.ASCII)
ELEMENT_PATTERN = re.compile(r"\(\s*(\d+)\s*,\s*(\d+)\s*,\s*([+-]?\d+)\s*\)", re.ASCII)


def _parse_dimension(pattern: re.Pattern, line: str, line_number: int, source: str) -> int:
    match = pattern.fullmatch(line)
    if match is None:
        raise MatrixFormatError("invalid dimension format, expected 'rows=X' and 'cols=Y'",
                                source=source, line_number=line_number, line=line)
    try:
        value = int(match.group(1))
    except ValueError:
        raise MatrixFormatError(f"invalid matrix dimension '{match.group(1)}', number expected",
                                source=source, line_number=line_number, line=line)
    if value < 0:
        raise MatrixFormatError(f"invalid matrix dimension '{match.group(1)}', non-negative number expected",
                                source=source, line_number=line_number, line=line)
    return value


def from_text(text: str, source: str = '<string>', config: Optional[MatrixConfig] = None) -> SparseMatrix:
    """Parse a matrix from its textual form.

    The first two lines declare the shape as ``rows=N`` and ``cols=M``; every
    following non-blank line is one ``(row, col, value)`` entry. Entries past the
    declared shape grow the matrix unless the config's bounds policy is 'strict'.

    Args:
        text: The full matrix text.
        source: Name used in error messages, usually the file path.
        config: Policies for the parsed matrix.

    Returns:
        The parsed SparseMatrix.

    Raises:
        MatrixFormatError: On the first malformed line; no partial matrix is returned.
    """
    # only "\n" ends a line so line numbers match the file; strip() removes any "\r"
    lines = [line.strip() for line in text.rstrip().split("\n")]
    if len(lines) < 2:
        raise MatrixFormatError("not enough lines for dimensions", source=source)

    rows = _parse_dimension(ROWS_PATTERN, lines[0], 1, source)
    cols = _parse_dimension(COLS_PATTERN, lines[1], 2, source)
    matrix = SparseMatrix(rows, cols, config=config if config is not None else MatrixConfig())

    for line_number, line in enumerate(lines[2:], start=3):
        if line == "":
            continue

        match = ELEMENT_PATTERN.fullmatch(line)
        if match is None:
            raise MatrixFormatError("invalid element format", source=source, line_number=line_number, line=line)

        row, col, value = (int(g) for g in match.groups())
        try:
            matrix.set_element(row, col, value)
        except MatrixIndexError as e:
            raise MatrixFormatError(str(e), source=source, line_number=line_number, line=line) from e

    return matrix


def to_text(matrix: SparseMatrix) -> str:
    """Serialize a matrix to text, one entry per line in ascending (row, col) order."""
    lines = [f"{ROWS_KEY}={matrix.rows}", f"{COLS_KEY}={matrix.cols}"]
    lines.extend(f"({i}, {j}, {v})" for i, j, v in matrix.entries())
    return "\n".join(lines).rstrip()


def load_matrix(path: str, config: Optional[MatrixConfig] = None) -> SparseMatrix:
    """Read and parse a matrix file.

    Raises:
        MatrixNotFoundError: If the file is missing or cannot be read.
        MatrixFormatError: If the content is malformed or not UTF-8.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise MatrixFormatError(f"file is not valid UTF-8 ({e.reason})", source=str(path)) from e
    except OSError as e:
        raise MatrixNotFoundError(str(path)) from e

    return from_text(text, source=str(path), config=config)


def save_matrix(matrix: SparseMatrix, path: str) -> None:
    """Write a matrix file in a single write call.

    Raises:
        MatrixWriteError: If the file cannot be written.
    """
    content = to_text(matrix)
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
    except OSError as e:
        raise MatrixWriteError(str(path), e.strerror or str(e)) from e
