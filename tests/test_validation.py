"""
Tests for rejection of invalid UNIFAC input.
"""

import logging
import numpy as np
import pytest

from pyunifac import (
  UNIFAC, activity_coefficients,
  UNIFACError, InvalidTemperatureError, InvalidCompositionError, MissingInteractionDataError,
)

diethylamine = {1: 2, 2: 1, 33: 1}
heptane = {1: 2, 2: 5}
nitroethane = {1: 1, 56: 1}
x_binary = [0.4, 0.6]


@pytest.mark.parametrize("T", [0., -10., np.nan, np.inf, "hot", None])
def test_invalid_temperature(T):
  with pytest.raises(InvalidTemperatureError):
    activity_coefficients([diethylamine, heptane], x_binary, T)


def test_errors_are_value_errors():
  assert issubclass(InvalidTemperatureError, UNIFACError)
  assert issubclass(InvalidCompositionError, ValueError)
  assert issubclass(MissingInteractionDataError, ValueError)


def test_empty_species():
  nu = np.zeros((56, 2))
  nu[0, 0] = 2
  nu[1, 0] = 5
  with pytest.raises(InvalidCompositionError):
    activity_coefficients(nu, x_binary, 300.)


def test_zero_surface_area_species():
  # quaternary carbon has Q = 0
  with pytest.raises(InvalidCompositionError):
    activity_coefficients([heptane, {4: 1}], x_binary, 300.)


def test_unparameterised_subgroup_dict():
  with pytest.raises(InvalidCompositionError):
    activity_coefficients([heptane, {1: 1, 5: 1}], x_binary, 300.)


def test_unparameterised_subgroup_matrix():
  nu = np.zeros((56, 2))
  nu[0, :] = 2
  nu[1, 0] = 5
  nu[4, 1] = 1
  with pytest.raises(InvalidCompositionError):
    activity_coefficients(nu, x_binary, 300.)


@pytest.mark.parametrize("count", [-1, 1.5])
def test_invalid_counts(count):
  with pytest.raises(InvalidCompositionError):
    activity_coefficients([heptane, {1: 2, 2: count}], x_binary, 300.)


def test_wrong_matrix_shape():
  with pytest.raises(InvalidCompositionError):
    activity_coefficients(np.ones((55, 2)), x_binary, 300.)


def test_mole_fraction_length_mismatch():
  with pytest.raises(InvalidCompositionError):
    activity_coefficients([diethylamine, heptane], [0.2, 0.3, 0.5], 300.)


def test_mole_fractions_not_normalized():
  with pytest.raises(InvalidCompositionError):
    activity_coefficients([diethylamine, heptane], [0.3, 0.6], 300.)


def test_mole_fraction_check_disabled():
  gammas = activity_coefficients([diethylamine, heptane], [0.3, 0.6], 300., check_mole_fractions=False)
  assert np.all(gammas > 0)


def test_mole_fraction_tolerance():
  x = [0.4 + 1e-9, 0.6]
  assert np.all(activity_coefficients([diethylamine, heptane], x, 300.) > 0)
  with pytest.raises(InvalidCompositionError):
    activity_coefficients([diethylamine, heptane], x, 300., xtol=1e-12)


def test_negative_mole_fraction():
  with pytest.raises(InvalidCompositionError):
    activity_coefficients([diethylamine, heptane], [-0.2, 1.2], 300.)


def test_zero_weighted_surface_area():
  with pytest.raises(InvalidCompositionError):
    activity_coefficients([diethylamine, heptane], [0., 0.], 300., check_mole_fractions=False)


def test_missing_interaction_strict():
  with pytest.raises(MissingInteractionDataError):
    activity_coefficients([diethylamine, nitroethane], x_binary, 300., strict_interactions=True)


def test_missing_interaction_warns(caplog):
  with caplog.at_level(logging.WARNING, logger="pyunifac"):
    gammas = activity_coefficients([diethylamine, nitroethane], x_binary, 300.)
  assert np.all(gammas > 0)
  assert "no published interaction parameters" in caplog.text
  assert "(33, 56)" in caplog.text and "(56, 33)" in caplog.text


def test_published_mixture_does_not_warn(caplog):
  with caplog.at_level(logging.WARNING, logger="pyunifac"):
    UNIFAC(300., [diethylamine, heptane], x_binary, strict_interactions=True)
  assert caplog.text == ""
