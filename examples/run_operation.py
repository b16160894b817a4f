import os
import sys

# Add the src directory to Python path to import local spmatrix
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))


from spmatrix import MatrixCalculator, MatrixConfig



def run_examples():
    """Add, subtract and multiply the bundled example matrices."""
    script_dir = os.path.dirname(os.path.abspath(__file__))
    data_dir = os.path.join(script_dir, 'data')
    output_dir = os.path.join(script_dir, 'output')
    os.makedirs(output_dir, exist_ok=True)

    a_fp = os.path.join(data_dir, 'a.txt')
    b_fp = os.path.join(data_dir, 'b.txt')
    c_fp = os.path.join(data_dir, 'c.txt')

    # config = MatrixConfig(bounds_policy='strict', prune_zeros=True)
    config = MatrixConfig(prune_zeros=True)
    calculator = MatrixCalculator(n_workers=2, config=config)

    calculator.run(a_fp, c_fp, 'i', os.path.join(output_dir, 'a_plus_c.txt'))
    calculator.run(a_fp, c_fp, 'ii', os.path.join(output_dir, 'a_minus_c.txt'))
    result = calculator.run(a_fp, b_fp, 'iii', os.path.join(output_dir, 'a_times_b.txt'))

    print("a @ b:")
    print(result.to_dense())


if __name__ == "__main__":

    run_examples()
