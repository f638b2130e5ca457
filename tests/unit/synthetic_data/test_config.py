from pathlib import Path

import pytest

from style_sim.core.errors import (
    InvalidArgumentError,
    UnsupportedModelError,
)
from style_sim.synthetic_data.config import SimulationConfig
from style_sim.synthetic_data.parameters import load_config
from style_sim.synthetic_data.presets import (
    PARAMS_DIR,
    get_available_presets,
    get_preset,
)

########################################################
# Configuration loading
########################################################


def test_configuration_presets_load() -> None:
    """Make sure that all the preset configuration files load."""

    for config_path in PARAMS_DIR.glob("*.yaml"):
        # Skip empty files
        if config_path.read_text().strip() == "":
            continue
        preset = load_config(config_path)
        assert preset is not None


def test_get_preset_baseline_succeeds() -> None:
    preset = get_preset("baseline")
    assert preset.style is None
    assert preset.seed == 2024


def test_get_preset_unknown_raises() -> None:
    with pytest.raises(ValueError, match="Unknown preset"):
        get_preset("nonexistent_preset")


def test_available_presets_sorted() -> None:
    presets = get_available_presets()
    assert "baseline" in presets
    assert presets == sorted(presets)


def test_preset_style_list_is_plain_list() -> None:
    preset = get_preset("extreme_acquiescence")
    assert preset.style == ["ERS1", "ARS"]
    assert preset.style_variance == [1.0, 0.5]
    assert preset.n_style_requests == 2


def test_load_config_defaults() -> None:
    config = load_config(None)
    assert config == SimulationConfig()


def test_load_config_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_load_config_invalid_values_raise(tmp_path: Path) -> None:
    config_path = tmp_path / "bad.yaml"
    config_path.write_text("categories: 1\n")

    with pytest.raises(InvalidArgumentError, match="categories"):
        load_config(config_path)


########################################################
# Validation
########################################################


class TestSimulationConfigValidation:
    def test_defaults_are_valid(self) -> None:
        config = SimulationConfig()
        assert config.n == 200
        assert config.irt_model == "RSM"

    def test_needs_respondents(self) -> None:
        with pytest.raises(InvalidArgumentError, match="respondent"):
            SimulationConfig(n=0)

    def test_needs_items(self) -> None:
        with pytest.raises(InvalidArgumentError, match="item"):
            SimulationConfig(items=0)

    def test_needs_two_categories(self) -> None:
        with pytest.raises(InvalidArgumentError, match="categories"):
            SimulationConfig(categories=1)

    def test_slider_scale_categories_allowed(self) -> None:
        config = SimulationConfig(categories=101)

        assert config.categories == 101

    def test_needs_content_trait(self) -> None:
        with pytest.raises(InvalidArgumentError, match="content trait"):
            SimulationConfig(content_dimensions=0)

    def test_negative_seed_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="seed"):
            SimulationConfig(seed=-1)

    def test_unsupported_model_raises(self) -> None:
        with pytest.raises(UnsupportedModelError, match="RSM"):
            SimulationConfig(irt_model="GPCM")

    def test_negative_reversed_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="reversed"):
            SimulationConfig(reversed=-0.1)

    def test_fractional_count_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="whole count"):
            SimulationConfig(reversed=1.5)

    def test_all_items_reversed_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Item count too"):
            SimulationConfig(items=3, reversed=3)

    def test_style_variance_without_style_raises(self) -> None:
        with pytest.raises(InvalidArgumentError, match="without a style"):
            SimulationConfig(style_variance=1.0)


class TestSimulationConfigProperties:
    @pytest.mark.parametrize(
        ("items", "reversed", "expected"),
        [
            (10, 1 / 3, 3),
            (10, 0.5, 5),
            (10, 2, 2),
            (4, 0.0, 0),
            (1, 1 / 3, 0),
        ],
    )
    def test_n_reversed(
        self, items: int, reversed: float, expected: int
    ) -> None:
        config = SimulationConfig(items=items, reversed=reversed)
        assert config.n_reversed == expected
        assert config.n_regular == items - expected

    def test_style_requests(self) -> None:
        config = SimulationConfig(style=["ERS1", "MRS"], categories=4)
        assert config.has_style
        # MRS is still counted, it is dropped later
        assert config.n_style_requests == 2

    def test_no_style(self) -> None:
        assert not SimulationConfig().has_style

    def test_total_items(self) -> None:
        config = SimulationConfig(items=6, content_dimensions=3)
        assert config.n_items_total == 18
