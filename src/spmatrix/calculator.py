import time
from typing import Optional

from .arithmetic import compute, resolve_operation
from .config import MatrixConfig
from .matrix_codec import load_matrix, save_matrix
from .sparse_matrix import SparseMatrix



class MatrixCalculator:
    """
    Driver that loads two matrix files, applies one arithmetic operation and
    writes the result.

    This class stands in for an interactive front end: the caller supplies the
    two input paths, an operation selector and the output path, and every
    failure surfaces as the package error raised by the step that failed.
    """

    def __init__(self, n_workers: int = 0, config: Optional[MatrixConfig] = None, verbose: bool = True):
        """
        Initialize the MatrixCalculator

        Args:
            n_workers: Number of worker processes for multiplication. 0 or 1 runs serially.
            config: MatrixConfig applied to every loaded matrix. Defaults to a fresh MatrixConfig()
            verbose: Whether to print progress and timings
        """
        self.n_workers = n_workers
        self.config = config if config is not None else MatrixConfig()
        self.config.validate()
        self.verbose = verbose

        self.result = None

    def _log(self, msg: str) -> None:
        if self.verbose:
            print(msg)

    def load(self, path: str) -> SparseMatrix:
        return load_matrix(path, config=self.config)

    def compute(self, a: SparseMatrix, b: SparseMatrix, operation: str) -> SparseMatrix:
        self.result = compute(a, b, operation, n_workers=self.n_workers)
        return self.result

    def save(self, matrix: SparseMatrix, path: str) -> None:
        save_matrix(matrix, path)

    def run(self, path_a: str, path_b: str, operation: str, output_path: str) -> SparseMatrix:
        """
        Load two matrices, combine them and save the result
        path_a: str
            Path of the left operand matrix file
        path_b: str
            Path of the right operand matrix file
        operation: str
            'add', 'subtract', 'multiply' or the menu codes 'i', 'ii', 'iii'
        output_path: str
            Path the result matrix is written to
        """
        # fail on a bad selector before touching any file
        operation = resolve_operation(operation)

        self._log(f"=== Computing sparse matrix {operation} ===")
        start_time = time.time()

        st = time.time()
        a = self.load(path_a)
        self._log(f"First matrix loaded: {a.rows}x{a.cols}, {a.nnz} entries")
        b = self.load(path_b)
        self._log(f"Second matrix loaded: {b.rows}x{b.cols}, {b.nnz} entries")
        self._log(f"  took: {time.time() - st} seconds")

        st = time.time()
        self._log(f"Result of {operation}")
        result = self.compute(a, b, operation)
        self._log(f"  result: {result.rows}x{result.cols}, {result.nnz} entries")
        self._log(f"  took: {time.time() - st} seconds")

        self.save(result, output_path)
        self._log(f"Result saved to {output_path}")
        self._log(f"Total time taken: {time.time() - start_time} seconds")
        return result

    def get_result(self) -> Optional[SparseMatrix]:
        """
        Get the result of the last computation
        """
        return self.result
