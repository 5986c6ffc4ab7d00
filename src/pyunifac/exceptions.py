""" exceptions raised while validating UNIFAC input """


class UNIFACError(ValueError):
  """Base class for invalid input to the UNIFAC model."""


class InvalidTemperatureError(UNIFACError):
  """Raised when the temperature is not a finite number above 0 K."""


class InvalidCompositionError(UNIFACError):
  """Raised for bad subgroup counts or mole fractions."""


class MissingInteractionDataError(UNIFACError):
  """Raised when subgroups of different main groups have no published interaction parameter."""
