import numpy as np
import pytest

from style_sim.core.utils import cell_seed, get_rng, softmax


def test_rng_reproducibility() -> None:
    rng1 = get_rng(42)
    rng2 = get_rng(42)
    assert rng1.random() == rng2.random()


class TestCellSeed:
    def test_first_cell(self) -> None:
        assert cell_seed(0, 1, 1) == 4

    def test_shifted_by_base_seed(self) -> None:
        # (2 + 3) * (2 + 3 + 1) / 2 + 3 = 18
        assert cell_seed(10, 2, 3) == 28

    def test_unique_per_cell(self) -> None:
        seeds = {
            cell_seed(7, i, j) for i in range(1, 21) for j in range(1, 21)
        }
        assert len(seeds) == 400

    def test_positions_are_one_based(self) -> None:
        with pytest.raises(ValueError, match="1-based"):
            cell_seed(0, 0, 1)
        with pytest.raises(ValueError, match="1-based"):
            cell_seed(0, 1, 0)


class TestSoftmax:
    def test_sums_to_one(self) -> None:
        logits = get_rng(42).normal(size=(4, 6))
        probs = softmax(logits, axis=0)

        np.testing.assert_allclose(probs.sum(axis=0), np.ones(6))

    def test_stable_for_large_logits(self) -> None:
        probs = softmax(np.array([1000.0, 1000.0]))

        np.testing.assert_allclose(probs, [0.5, 0.5])

    def test_shift_invariant(self) -> None:
        logits = np.array([0.1, -0.4, 2.0])

        np.testing.assert_allclose(softmax(logits), softmax(logits + 3.0))
