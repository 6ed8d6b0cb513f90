import pytest

from daisyworld import climate
from daisyworld.config import SimulationConfig, SpeciesConfig
from daisyworld.grid import PopulationCounts
from daisyworld.growth import death_chance, growth_probability, species_growth
from daisyworld.patch import Patch


def test_average_albedo():
    assert climate.average_albedo(PopulationCounts(0, 0, 100), 100) == pytest.approx(0.4)
    assert climate.average_albedo(PopulationCounts(50, 50, 0), 100) == pytest.approx(0.5)
    assert climate.average_albedo(PopulationCounts(20, 20, 60), 100) == pytest.approx(0.44)


def test_average_albedo_uses_configured_table():
    cfg = SimulationConfig(albedo_empty=0.0, albedo_black=0.0, albedo_white=1.0)
    table = climate.albedo_table(cfg)
    assert table[Patch.WHITE_DAISY] == 1.0
    assert climate.average_albedo(PopulationCounts(0, 10, 0), 10, table) == 1.0


def test_patch_albedo_is_the_default_table():
    defaults = climate.albedo_table(SimulationConfig())
    assert all(defaults[kind] == kind.albedo for kind in Patch)

    custom = climate.albedo_table(SimulationConfig(albedo_white=0.9))
    assert custom[Patch.WHITE_DAISY] == 0.9
    assert Patch.WHITE_DAISY.albedo == 0.75


def test_temperature_formula():
    assert climate.temperature(1.0, 0.0) == 25.0
    expected = (0.8 * 0.6) ** 0.25 * 50 - 25
    assert climate.temperature(0.8, 0.4) == pytest.approx(expected)


def test_temperature_floor_at_absolute_zero():
    assert climate.temperature(1.0, 1.0) == -273.0
    assert climate.temperature(0.0, 0.4) == -273.0
    assert climate.temperature(1.2, 1.5) == -273.0


def test_temperature_rises_with_luminosity_and_darkness():
    assert climate.temperature(1.2, 0.4) > climate.temperature(0.8, 0.4)
    assert climate.temperature(1.0, 0.25) > climate.temperature(1.0, 0.75)


def test_advance_luminosity_saturates():
    assert climate.advance_luminosity(0.8) == pytest.approx(0.8001)
    assert climate.advance_luminosity(1.59995) == 1.6
    assert climate.advance_luminosity(1.6) == 1.6
    assert climate.advance_luminosity(1.0, increase=0.5, maximum=1.2) == 1.2


def test_growth_peaks_at_optimal():
    assert growth_probability(10.0, 10.0, 5.0, 40.0) == 1.0
    assert growth_probability(30.0, 30.0, 5.0, 40.0) == 1.0
    assert growth_probability(2.0, 2.0, 0.0, 4.0) == 1.0


def test_growth_zero_at_range_boundaries_for_centered_optimum():
    assert growth_probability(0.0, 2.0, 0.0, 4.0) == 0.0
    assert growth_probability(4.0, 2.0, 0.0, 4.0) == 0.0


def test_growth_zero_outside_range():
    assert growth_probability(4.99, 10.0, 5.0, 40.0) == 0.0
    assert growth_probability(40.01, 30.0, 5.0, 40.0) == 0.0
    assert growth_probability(-273.0, 10.0, 5.0, 40.0) == 0.0


def test_growth_parabola_values():
    k = 4.0 / (35.0 * 35.0)
    assert growth_probability(5.0, 10.0, 5.0, 40.0) == pytest.approx(1.0 - k * 25.0)
    assert growth_probability(20.0, 30.0, 5.0, 40.0) == pytest.approx(1.0 - k * 100.0)
    # clamped where the parabola dips below zero inside the range
    assert growth_probability(40.0, 10.0, 5.0, 40.0) == 0.0


def test_species_growth_and_death_chance():
    black = SpeciesConfig(10.0)
    assert species_growth(10.0, black) == 1.0
    assert death_chance(0.0, 0.01, 0.3) == 0.3
    assert death_chance(0.01, 0.01, 0.3) == 0.3
    assert death_chance(0.02, 0.01, 0.3) == 0.0
