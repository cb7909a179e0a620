import math
import unittest

import numpy as np

from givenslas.matrix import as_matrix, identity, multiply, round_matrix, sub_subdiagonal_max, transpose


def random_square(n: int, seed: int) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.standard_normal((n, n))


class TestMatrixPrimitives(unittest.TestCase):
    def test_identity_laws(self):
        for n in (1, 3, 4, 7):
            A = random_square(n, seed=10 + n)
            I = identity(n)
            np.testing.assert_array_equal(multiply(I, A), A)
            np.testing.assert_array_equal(multiply(A, I), A)

    def test_transpose_involution(self):
        A = random_square(5, seed=3)
        np.testing.assert_array_equal(transpose(transpose(A)), A)

    def test_transpose_returns_new_array(self):
        A = random_square(3, seed=4)
        T = transpose(A)
        T[0, 1] = 123.0
        self.assertNotEqual(A[1, 0], 123.0)

    def test_round_normalizes_negative_zero(self):
        A = np.array([[-1e-9, 2.0], [-0.0, -3.00004]])
        R = round_matrix(A, 4)
        self.assertEqual(R[0, 0], 0.0)
        self.assertFalse(math.copysign(1.0, R[0, 0]) < 0)
        self.assertFalse(math.copysign(1.0, R[1, 0]) < 0)
        self.assertEqual(R[1, 1], -3.0)
        self.assertFalse(np.any(np.signbit(R[R == 0.0])))

    def test_round_does_not_mutate_input(self):
        A = np.array([[1.23456789, -1e-9], [0.5, 2.0]])
        before = A.copy()
        round_matrix(A, 2)
        np.testing.assert_array_equal(A, before)
        self.assertTrue(np.signbit(A[0, 1]))

    def test_as_matrix_rejects_non_square(self):
        with self.assertRaises(ValueError):
            as_matrix(np.zeros((2, 3)))
        with self.assertRaises(ValueError):
            as_matrix(np.zeros(4))
        with self.assertRaises(ValueError):
            as_matrix([[1.0, 2.0], [3.0]])

    def test_as_matrix_copies(self):
        A = np.eye(3)
        M = as_matrix(A)
        M[0, 0] = 5.0
        self.assertEqual(A[0, 0], 1.0)
        self.assertEqual(M.dtype, np.float64)

    def test_sub_subdiagonal_max(self):
        A = np.arange(16, dtype=np.float64).reshape(4, 4)
        # Entries at i >= j+2: A[2,0]=8, A[3,0]=12, A[3,1]=13.
        self.assertEqual(sub_subdiagonal_max(A), 13.0)
        self.assertEqual(sub_subdiagonal_max(np.ones((2, 2))), 0.0)


if __name__ == "__main__":
    unittest.main()
