import pytest
import os
import sys

# Add the src directory to Python path to import local spmatrix
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from spmatrix import SparseMatrix, MatrixConfig, from_text, to_text, load_matrix, save_matrix
from spmatrix import MatrixFormatError, MatrixNotFoundError, MatrixWriteError, MatrixIOError
from test_utils import build_matrix, write_matrix_file


def test_parse_basic():
    m = from_text("rows=3\ncols=4\n(0, 1, 5)\n(2, 3, -2)\n")
    assert m.shape == (3, 4)
    assert m.get_element(0, 1) == 5
    assert m.get_element(2, 3) == -2
    assert m.nnz == 2


def test_parse_whitespace_variants():
    text = "  rows=2  \r\ncols=2\r\n\r\n(0,0,1)\n   \n( 1 ,1,  +3 )\t\n\n"
    m = from_text(text)
    assert m.get_element(0, 0) == 1
    assert m.get_element(1, 1) == 3


def test_parse_header_only():
    m = from_text("rows=0\ncols=0")
    assert m.shape == (0, 0)
    assert m.nnz == 0


def test_entries_beyond_header_grow_matrix():
    m = from_text("rows=2\ncols=2\n(4, 0, 1)")
    assert m.shape == (5, 2)


def test_strict_config_rejects_entries_beyond_header():
    with pytest.raises(MatrixFormatError) as exc_info:
        from_text("rows=2\ncols=2\n(0, 0, 1)\n(4, 0, 1)", config=MatrixConfig(bounds_policy='strict'))
    assert exc_info.value.line_number == 4


@pytest.mark.parametrize("text", ["", "rows=2", "rows=2\n\n\n"])
def test_not_enough_lines(text):
    with pytest.raises(MatrixFormatError, match="not enough lines"):
        from_text(text)


@pytest.mark.parametrize("text, bad_line", [
    ("cols=2\nrows=2", 1),
    ("rows=x\ncols=2", 1),
    ("rows=2\ncols=-2", 2),
    ("rows=2\ncolumns=2", 2),
    ("rows=2\ncols=2.5", 2),
])
def test_invalid_dimension_format(text, bad_line):
    with pytest.raises(MatrixFormatError, match="invalid dimension format") as exc_info:
        from_text(text)
    assert exc_info.value.line_number == bad_line
    assert exc_info.value.line == text.splitlines()[bad_line - 1]


def test_malformed_element_references_line_number():
    with pytest.raises(MatrixFormatError) as exc_info:
        from_text("rows=2\ncols=2\n(1, 1, bad)")
    assert exc_info.value.line_number == 3
    assert exc_info.value.line == "(1, 1, bad)"
    assert "line 3" in str(exc_info.value)


@pytest.mark.parametrize("line", ["(1, 1)", "1, 1, 1", "(-1, 0, 1)", "(0, 0, 1.5)", "(0, 0, 1) extra", "[0, 0, 1]"])
def test_malformed_element_variants(line):
    with pytest.raises(MatrixFormatError) as exc_info:
        from_text(f"rows=2\ncols=2\n(0, 0, 1)\n\n{line}")
    assert exc_info.value.line_number == 5


def test_serialize_format():
    m = build_matrix(3, 3, [(2, 2, -1), (0, 1, 4), (0, 0, 7)])
    assert to_text(m) == "rows=3\ncols=3\n(0, 0, 7)\n(0, 1, 4)\n(2, 2, -1)"


def test_serialize_empty():
    assert to_text(SparseMatrix(2, 5)) == "rows=2\ncols=5"


def test_serialize_is_deterministic():
    a = build_matrix(4, 4, [(3, 0, 1), (0, 3, 2), (1, 1, 3)])
    b = build_matrix(4, 4, [(1, 1, 3), (0, 3, 2), (3, 0, 1)])
    assert to_text(a) == to_text(b) == to_text(a)


def test_round_trip_keeps_explicit_zeros():
    m = build_matrix(5, 3, [(0, 0, 1), (4, 2, -8), (2, 1, 0)])
    parsed = from_text(to_text(m))
    assert parsed.stored_equal(m)


def test_load_and_save(tmp_path):
    fp = write_matrix_file(tmp_path, 'a.txt', "rows=2\ncols=2\n(0, 0, 1)\n(1, 1, 2)\n")
    m = load_matrix(fp)
    assert m == build_matrix(2, 2, [(0, 0, 1), (1, 1, 2)])

    out = os.path.join(str(tmp_path), 'out.txt')
    save_matrix(m, out)
    with open(out, 'r', encoding='utf-8') as f:
        assert f.read() == "rows=2\ncols=2\n(0, 0, 1)\n(1, 1, 2)"
    assert load_matrix(out).stored_equal(m)


def test_load_error_names_source(tmp_path):
    fp = write_matrix_file(tmp_path, 'bad.txt', "rows=2\ncols=2\n(0, 0, x)")
    with pytest.raises(MatrixFormatError) as exc_info:
        load_matrix(fp)
    assert exc_info.value.source == fp
    assert fp in str(exc_info.value)


def test_missing_file(tmp_path):
    fp = os.path.join(str(tmp_path), 'does_not_exist.txt')
    with pytest.raises(MatrixNotFoundError) as exc_info:
        load_matrix(fp)
    assert exc_info.value.path == fp
    assert not isinstance(exc_info.value, MatrixFormatError)


def test_directory_is_not_found(tmp_path):
    with pytest.raises(MatrixNotFoundError):
        load_matrix(str(tmp_path))


def test_non_utf8_file_is_format_error(tmp_path):
    fp = os.path.join(str(tmp_path), 'latin.txt')
    with open(fp, 'wb') as f:
        f.write(b"rows=1\ncols=1\n\xff\xfe")
    with pytest.raises(MatrixFormatError):
        load_matrix(fp)


def test_save_failure(tmp_path):
    out = os.path.join(str(tmp_path), 'missing_dir', 'out.txt')
    with pytest.raises(MatrixWriteError) as exc_info:
        save_matrix(SparseMatrix(1, 1), out)
    assert exc_info.value.path == out
    assert isinstance(exc_info.value, MatrixIOError)
    assert isinstance(exc_info.value, OSError)


@pytest.mark.parametrize("separator", ["\x0b", "\x0c", "\x1c", "\x85", "\u2028", "\u2029"])
def test_only_newline_ends_a_line(separator):
    with pytest.raises(MatrixFormatError) as exc_info:
        from_text(f"rows=2\ncols=2\n(0, 0, 1){separator}\n(1, 1, bad)")
    assert exc_info.value.line_number == 4
    assert exc_info.value.line == "(1, 1, bad)"


def test_leading_blank_line_rejected():
    with pytest.raises(MatrixFormatError, match="invalid dimension format") as exc_info:
        from_text("\nrows=2\ncols=2")
    assert exc_info.value.line_number == 1
