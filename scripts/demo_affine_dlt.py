import numpy as np

from affinedlt import (
    affine_dlt, affine_dlt3, apply_affine, residual_sum_of_squares, DegenerateInputError,
)


def main() -> None:
    rng = np.random.default_rng(0)

    # True affine transform
    T_true = np.array(
        [[1.05, 0.02, 15.0],
         [-0.01, 0.98, -8.0],
         [0.0,  0.0,  1.0]],
        dtype=np.float64,
    )

    # Generate correspondences
    n = 200
    pts0 = rng.uniform([0, 0], [640, 480], size=(n, 2)).astype(np.float64)
    pts1 = apply_affine(T_true, pts0)

    # Add Gaussian noise (pixel noise)
    pts1 += rng.normal(0.0, 0.8, size=pts1.shape)

    T_est = np.zeros((3, 3), dtype=np.float32)
    affine_dlt(T_est, pts0, pts1)

    print("T_true:\n", T_true)
    print("T_est (least squares, N=%d):\n" % n, T_est)
    print("RSS true:", residual_sum_of_squares(T_true, pts0, pts1))
    print("RSS est: ", residual_sum_of_squares(T_est, pts0, pts1))

    # Exact fit from the first 3 (noise-free) correspondences
    T3 = np.zeros((3, 3), dtype=np.float32)
    affine_dlt3(T3, pts0[:3], apply_affine(T_true, pts0[:3]))
    print("T_est (exact, N=3):\n", T3)

    # Collinear triplet is rejected
    line = np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 2.0]])
    try:
        affine_dlt3(T3, line, line)
    except DegenerateInputError as exc:
        print("collinear triplet rejected:", exc)


if __name__ == "__main__":
    main()
