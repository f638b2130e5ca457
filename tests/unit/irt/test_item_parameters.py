import numpy as np
import pytest

from style_sim.irt import RatingScaleParameters


class TestRatingScaleParameters:
    def test_sizes(self) -> None:
        params = RatingScaleParameters(
            locations=(0.1, -0.2, 0.3), thresholds=(-1.0, 0.0, 1.0, 2.0)
        )

        assert params.n_items == 3
        assert params.n_categories == 5

    def test_vector_is_locations_then_thresholds(self) -> None:
        params = RatingScaleParameters(
            locations=(0.1, -0.2), thresholds=(-1.0, 1.0)
        )

        np.testing.assert_array_equal(
            params.as_vector(), [0.1, -0.2, -1.0, 1.0]
        )
        assert params.names() == ["item1", "item2", "categ1", "categ2"]

    def test_empty_locations_raise(self) -> None:
        with pytest.raises(ValueError, match="item location"):
            RatingScaleParameters(locations=(), thresholds=(0.0,))

    def test_empty_thresholds_raise(self) -> None:
        with pytest.raises(ValueError, match="threshold"):
            RatingScaleParameters(locations=(0.0,), thresholds=())

    def test_frozen(self) -> None:
        params = RatingScaleParameters(locations=(0.0,), thresholds=(0.0,))

        with pytest.raises(ValueError):
            params.locations = (1.0,)  # type: ignore[misc]
