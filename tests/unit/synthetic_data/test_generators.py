import warnings
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from style_sim.core.errors import (
    IdentifiabilityError,
    InvalidArgumentError,
    InvalidLengthError,
    SimulationWarning,
)
from style_sim.synthetic_data.config import SimulationConfig
from style_sim.synthetic_data.generators import (
    simulate_style_data,
    to_csv,
    to_dataframe,
)


class TestSimulateStyleData:
    def test_shapes_without_style(self) -> None:
        config = SimulationConfig(n=50, items=4, categories=5, seed=1)

        data = simulate_style_data(config)

        assert data.responses.shape == (50, 4, 1)
        assert data.responses.dtype == np.int8
        assert data.theta.shape == (50, 1)
        assert data.trait_names == ["content1"]
        assert list(data.item_parameters.index) == [
            "item1",
            "item2",
            "item3",
            "item4",
            "categ1",
            "categ2",
            "categ3",
            "categ4",
        ]
        assert data.response_style is None
        assert data.covariance is None

    def test_responses_in_category_range(self) -> None:
        config = SimulationConfig(n=200, items=6, categories=4, seed=5)

        data = simulate_style_data(config)

        assert data.responses.min() >= 0
        assert data.responses.max() <= 3

    def test_slider_scale_with_101_categories(self) -> None:
        config = SimulationConfig(n=20, items=3, categories=101, seed=1)

        data = simulate_style_data(config)

        assert data.responses.shape == (20, 3, 1)
        assert data.responses.dtype == np.int8
        assert data.responses.min() >= 0
        assert data.responses.max() <= 100
        assert len(data.item_parameters) == 3 + 100

    def test_metadata(self) -> None:
        config = SimulationConfig(n=30, items=9, reversed=1 / 3, seed=2)

        data = simulate_style_data(config)

        assert data.n == 30
        assert data.items_per_dimension == 9
        assert data.reverse_coded_items == 3
        assert data.irt_model == "RSM"
        assert data.config == config

    def test_seed_reproducible(self) -> None:
        config = SimulationConfig(
            n=40, items=5, style="ERS1", style_variance=1.0, seed=99
        )

        first = simulate_style_data(config)
        second = simulate_style_data(config)

        np.testing.assert_array_equal(first.responses, second.responses)
        np.testing.assert_array_equal(first.theta, second.theta)
        pd.testing.assert_series_equal(
            first.item_parameters, second.item_parameters
        )

    def test_different_seeds_differ(self) -> None:
        first = simulate_style_data(SimulationConfig(n=40, seed=1))
        second = simulate_style_data(SimulationConfig(n=40, seed=2))

        assert not np.array_equal(first.responses, second.responses)

    def test_first_respondents_do_not_depend_on_n(self) -> None:
        small = simulate_style_data(SimulationConfig(n=10, seed=7))
        large = simulate_style_data(SimulationConfig(n=25, seed=7))

        np.testing.assert_array_equal(
            small.responses, large.responses[:10]
        )

    def test_styles(self) -> None:
        config = SimulationConfig(
            n=60,
            items=6,
            categories=5,
            style=["ERS1", "ARS"],
            style_variance=[1.0, 0.5],
            style_mean=[0.0, 0.2],
            seed=3,
        )

        data = simulate_style_data(config)

        assert data.theta.shape == (60, 3)
        assert data.trait_names == ["content1", "ERS1", "ARS"]
        assert data.response_style is not None
        assert data.response_style.styles == ["ERS1", "ARS"]
        assert data.response_style.style_variance == [1.0, 0.5]
        assert data.response_style.style_mean == [0.0, 0.2]
        np.testing.assert_array_equal(
            data.response_style.coding,
            [[1, 0], [0, 0], [0, 0], [0, 1], [1, 1]],
        )

    def test_midpoint_dropped_for_even_categories(self) -> None:
        config = SimulationConfig(
            n=20, categories=4, style="MRS", style_variance=1.0, seed=3
        )

        data = simulate_style_data(config)

        assert data.n_dimensions == 1
        assert data.response_style is not None
        assert data.response_style.styles == []
        assert data.response_style.coding.shape == (4, 0)

    def test_two_content_dimensions(self) -> None:
        config = SimulationConfig(
            n=30, items=5, content_dimensions=2, content_correlation=0.4
        )

        data = simulate_style_data(config)

        assert data.responses.shape == (30, 5, 2)
        assert data.covariance is not None
        np.testing.assert_array_equal(
            data.covariance, [[1.0, 0.4], [0.4, 1.0]]
        )

    def test_missing_style_variance_warns(self) -> None:
        config = SimulationConfig(n=20, style="ARS", seed=1)

        with pytest.warns(SimulationWarning, match="Variance of the"):
            simulate_style_data(config)

    def test_no_warning_with_style_variance(self) -> None:
        config = SimulationConfig(
            n=20, style="ARS", style_variance=0.5, seed=1
        )

        with warnings.catch_warnings():
            warnings.simplefilter("error")
            simulate_style_data(config)

    def test_fixed_theta(self) -> None:
        config = SimulationConfig(n=15, fixed_theta=np.linspace(-1, 1, 15))

        data = simulate_style_data(config)

        np.testing.assert_allclose(data.theta[:, 0], np.linspace(-1, 1, 15))

    def test_empirical_moments(self) -> None:
        config = SimulationConfig(
            n=50,
            content_dimensions=2,
            content_correlation=0.5,
            match_empirical_moments=True,
            seed=4,
        )

        data = simulate_style_data(config)

        np.testing.assert_allclose(data.theta.mean(axis=0), 0.0, atol=1e-10)
        np.testing.assert_allclose(
            np.cov(data.theta, rowvar=False),
            [[1.0, 0.5], [0.5, 1.0]],
            atol=1e-10,
        )

    def test_supplied_covariance_matrix(self) -> None:
        covariance = [[1.0, 0.0], [0.0, 0.3]]
        config = SimulationConfig(
            n=20, style="ERS1", covariance_matrix=covariance, seed=1
        )

        data = simulate_style_data(config)

        assert data.response_style is not None
        assert data.response_style.style_variance == [0.3]


class TestSimulateStyleDataErrors:
    def test_empirical_moments_need_enough_respondents(self) -> None:
        config = SimulationConfig(
            n=2, content_dimensions=2, match_empirical_moments=True
        )

        with pytest.raises(InvalidArgumentError, match="more respondents"):
            simulate_style_data(config)

    def test_custom_weights_wrong_length(self) -> None:
        config = SimulationConfig(categories=5, style=[1, 0, 1])

        with pytest.raises(InvalidArgumentError, match="number of weights"):
            simulate_style_data(config)

    def test_style_mean_wrong_length(self) -> None:
        config = SimulationConfig(
            style=["ERS1", "ARS"], style_variance=1.0, style_mean=[0, 0, 0]
        )

        with pytest.raises(InvalidLengthError, match="style_mean"):
            simulate_style_data(config)

    def test_covariance_matrix_wrong_dimension(self) -> None:
        config = SimulationConfig(style="ERS1", covariance_matrix=np.eye(3))

        with pytest.raises(InvalidArgumentError, match="wrong dimension"):
            simulate_style_data(config)

    def test_covariance_matrix_not_positive_semi_definite(self) -> None:
        config = SimulationConfig(
            n=20, style="ERS1", covariance_matrix=[[1.0, 2.0], [2.0, 1.0]]
        )

        with pytest.raises(InvalidArgumentError, match="semi-definite"):
            simulate_style_data(config)

    def test_fixed_theta_wrong_rows(self) -> None:
        config = SimulationConfig(n=10, fixed_theta=np.zeros(9))

        with pytest.raises(InvalidLengthError, match="one row per"):
            simulate_style_data(config)

    def test_fixed_thresholds_wrong_length(self) -> None:
        config = SimulationConfig(
            items=3, categories=3, reversed=0, fixed_thresholds=[0.0] * 4
        )

        with pytest.raises(InvalidLengthError, match="wrong length"):
            simulate_style_data(config)

    def test_sorted_fixed_locations_with_reversed_items(self) -> None:
        config = SimulationConfig(
            items=3,
            categories=3,
            reversed=1,
            fixed_thresholds=[-1.0, 0.0, 1.0, -0.5, 0.5],
        )

        with pytest.warns(SimulationWarning):
            with pytest.raises(IdentifiabilityError):
                simulate_style_data(config)


class TestExport:
    def test_to_dataframe(self) -> None:
        config = SimulationConfig(
            n=12, items=3, content_dimensions=2, reversed=0, seed=8
        )
        data = simulate_style_data(config)

        df = to_dataframe(data)

        assert list(df.columns) == [
            "respondent_id",
            "content1_item1",
            "content1_item2",
            "content1_item3",
            "content2_item1",
            "content2_item2",
            "content2_item3",
        ]
        assert df["respondent_id"].tolist() == list(range(1, 13))
        np.testing.assert_array_equal(
            df["content2_item3"].to_numpy(), data.responses[:, 2, 1]
        )
        np.testing.assert_array_equal(
            df.iloc[:, 1:].to_numpy(), data.flat_responses
        )

    def test_to_csv(self, tmp_path: Path) -> None:
        data = simulate_style_data(SimulationConfig(n=8, items=4, seed=1))
        path = tmp_path / "responses.csv"

        to_csv(data, str(path))

        df = pd.read_csv(path)
        assert df.shape == (8, 5)

    def test_theta_frame(self) -> None:
        config = SimulationConfig(
            n=5, style="ADRS", style_variance=1.0, seed=1
        )
        data = simulate_style_data(config)

        frame = data.theta_frame()

        assert list(frame.columns) == ["content1", "ADRS"]
        assert frame.shape == (5, 2)
