import logging
import numpy as np
from scipy import constants
from scipy.special import xlogy

from .unifac_subgroups import UFSG, UFIP, R, Q, NUM_SUBGROUPS, missing_interactions
from ..exceptions import InvalidTemperatureError, InvalidCompositionError, MissingInteractionDataError

logger = logging.getLogger(__name__)

# absolute tolerance on the sum of mole fractions
MOLE_FRACTION_TOL = 1e-6


def occurance_matrix_from_subgroups(subgroups: list):
  r"""
  Convert subgroup dictionaries into the occurrence matrix, :math:`\nu_{ki}`.

  :param subgroups: list of dictionaries, one per molecule, with subgroup IDs as keys and their occurrences as values
  :type subgroups: list[dict[int, int]]
  :return: occurrence matrix with shape (56, number of molecules); row ``k-1`` holds subgroup ``k``
  :rtype: numpy.ndarray
  """
  nu = np.zeros((NUM_SUBGROUPS, len(subgroups)))
  for i, mol_subgroup in enumerate(subgroups):
    for group, occurance in mol_subgroup.items():
      if group not in UFSG:
        raise InvalidCompositionError(f"molecule {i} contains subgroup {group}, which has no UNIFAC parameters")
      nu[int(group) - 1, i] = occurance
  return nu


class UNIFAC:

  r"""
  UNIFAC (UNIversal Functional Activity Coefficient) model class.

  This class implements the original UNIFAC activity coefficient model for a multi-molecule
  liquid mixture, given the subgroups that make up each molecule. Every property is evaluated
  for each composition in ``z``, so array results have shape (compositions, molecules).

  All input is validated when the object is created, before any arithmetic is performed.

  :param T: temperature (K)
  :type T: float
  :param subgroups: subgroup occurrences of each molecule, either as a (56, N) occurrence matrix
    where element (:math:`k-1`, :math:`i`) counts subgroup :math:`k` in molecule :math:`i`, or as a
    list of dictionaries mapping subgroup ID to occurrences.
  :type subgroups: numpy.ndarray or list[dict[int, int]]
  :param z: composition array (mol fractions) with shape (N,) or (compositions, N)
  :type z: numpy.ndarray
  :param check_mole_fractions: if True, reject compositions whose mol fractions do not sum to 1
  :type check_mole_fractions: bool, optional
  :param strict_interactions: if True, raise :class:`MissingInteractionDataError` when subgroups
    of different main groups have no published interaction parameter, instead of treating the
    interaction energy as zero
  :type strict_interactions: bool, optional
  :param xtol: absolute tolerance on the sum of mol fractions
  :type xtol: float, optional
  """

  def __init__(self, T: float, subgroups, z, check_mole_fractions=True, strict_interactions=False, xtol=MOLE_FRACTION_TOL):

    self.T = self._check_temperature(T)
    self.Rc = constants.R / 1000

    if isinstance(subgroups, (list, tuple)) and all(isinstance(mol, dict) for mol in subgroups):
      self._subgroups = [dict(mol) for mol in subgroups]
      self._occurance_matrix = occurance_matrix_from_subgroups(subgroups)
    else:
      self._occurance_matrix = self._check_occurance_matrix(subgroups)
      self._subgroups = [
        {k + 1: int(n) for k, n in enumerate(self._occurance_matrix[:, i]) if n != 0}
        for i in range(self._occurance_matrix.shape[1])
      ]
    self._check_counts()

    self.z = self._check_composition(z, check_mole_fractions, xtol)

    missing = missing_interactions(self.unique_groups())
    if missing:
      if strict_interactions:
        raise MissingInteractionDataError(f"no published interaction parameters for subgroup pairs {missing}")
      logger.warning(f"no published interaction parameters for subgroup pairs {missing}; using a_mn = 0")

    logger.debug(f"UNIFAC mixture of {self.N} molecules with {self.M} subgroups, {np.shape(self.z)[0]} compositions at T = {self.T} K")

  @staticmethod
  def _check_temperature(T):
    try:
      T = float(T)
    except (TypeError, ValueError):
      raise InvalidTemperatureError(f"temperature must be a number, got {T!r}")
    if not np.isfinite(T) or T <= 0:
      raise InvalidTemperatureError(f"temperature must be a finite value above 0 K, got {T}")
    return T

  @staticmethod
  def _check_occurance_matrix(nu):
    try:
      nu = np.array(nu, dtype=float)
    except (TypeError, ValueError):
      raise InvalidCompositionError("subgroup occurrence matrix must be numeric")
    if nu.ndim != 2 or nu.shape[0] != NUM_SUBGROUPS:
      raise InvalidCompositionError(f"subgroup occurrence matrix must have shape ({NUM_SUBGROUPS}, N), got {nu.shape}")
    return nu

  def _check_counts(self):
    nu = self._occurance_matrix
    if nu.shape[1] == 0:
      raise InvalidCompositionError("mixture must contain at least one molecule")
    if not np.all(np.isfinite(nu)) or np.any(nu < 0) or np.any(nu != np.round(nu)):
      raise InvalidCompositionError("subgroup occurrences must be non-negative integers")
    undefined = [k + 1 for k in np.flatnonzero(nu.any(axis=1)) if (k + 1) not in UFSG]
    if undefined:
      raise InvalidCompositionError(f"subgroups {undefined} have no UNIFAC parameters")
    for i, (r, q) in enumerate(zip(self.r(), self.q())):
      if r <= 0 or q <= 0:
        raise InvalidCompositionError(f"molecule {i} has zero volume or surface area (r = {r}, q = {q})")

  def _check_composition(self, z, check_mole_fractions, xtol):
    try:
      z = np.array(z, dtype=float)
    except (TypeError, ValueError):
      raise InvalidCompositionError("mol fractions must be numeric")
    if z.ndim == 1:
      z = z[np.newaxis, :]
    if z.ndim != 2 or z.shape[1] != self.N:
      raise InvalidCompositionError(f"expected mol fractions for {self.N} molecules, got shape {np.shape(z)}")
    if not np.all(np.isfinite(z)) or np.any(z < 0):
      raise InvalidCompositionError("mol fractions must be finite and non-negative")
    if check_mole_fractions:
      sums = z.sum(axis=1)
      if not np.allclose(sums, 1., rtol=0, atol=xtol):
        raise InvalidCompositionError(f"mol fractions must sum to 1, got {sums}")
    if np.any(z @ self.q() <= 0):
      raise InvalidCompositionError("mol fraction weighted surface area of the mixture is zero")
    return z

  def unique_groups(self):
    r"""
    Identifies the unique subgroups present in the mixture.

    :return: array of unique subgroup IDs
    :rtype: numpy.ndarray
    """
    self._unique_groups = np.flatnonzero(self._occurance_matrix.any(axis=1)) + 1
    return self._unique_groups

  @property
  def M(self):
    r"""
    :return: number of unique subgroups in the mixture
    :rtype: int
    """
    try:
      self._unique_groups
    except AttributeError:
      self.unique_groups()
    return len(self._unique_groups)

  @property
  def N(self):
    r"""
    :return: number of molecules in the mixture
    :rtype: int
    """
    return self._occurance_matrix.shape[1]

  @property
  def zc(self):
    r"""
    :return: coordination number (set to 10)
    :rtype: int
    """
    return 10

  def subgroups(self):
    r"""
    :returns: list of dictionaries with subgroup IDs as keys and their occurrences as values, one per molecule
    :rtype: list[dict[int, int]]
    """
    return self._subgroups

  def subgroup_names(self):
    r"""
    Same as :func:`subgroups`, keyed by subgroup formula instead of ID.

    :rtype: list[dict[str, int]]
    """
    return [{UFSG[group].group: occurance for group, occurance in mol.items()} for mol in self._subgroups]

  def occurance_matrix(self):
    r"""
    :return: subgroup occurrence matrix, :math:`\nu_{ki}`, with shape (56, N)
    :rtype: numpy.ndarray
    """
    return self._occurance_matrix

  def r(self):
    r"""
    Calculates the relative size of a molecule.
    This property is determined by summing the product of each subgroup's volume parameter (:math:`R_k`) and its frequency (:math:`\nu_{ki}`) within molecule :math:`i`.

    .. math::
        r_i = \sum_k \nu_{ki} R_k

    :returns: array of r parameters for each molecule
    :rtype: numpy.ndarray
    """
    self._r = self._occurance_matrix.T @ R
    return self._r

  def q(self):
    r"""
    Calculates the relative surface area of a molecule.
    This property is determined by summing the product of each subgroup's area parameter (:math:`Q_k`) and its frequency (:math:`\nu_{ki}`) within molecule :math:`i`.

    .. math::
        q_i = \sum_k \nu_{ki} Q_k

    :returns: array of q parameters for each molecule
    :rtype: numpy.ndarray
    """
    self._q = self._occurance_matrix.T @ Q
    return self._q

  def e(self):
    r"""
    Calculates the fraction of the surface area of molecule :math:`i` that belongs to subgroup :math:`k`.

    .. math::
        e_{ki} = \frac{\nu_{ki} Q_k}{q_i}

    Each column sums to 1.

    :return: matrix of subgroup area fractions with shape (56, N)
    :rtype: numpy.ndarray
    """
    try:
      self._q
    except AttributeError:
      self.q()
    self._e = self._occurance_matrix * Q[:, np.newaxis] / self._q[np.newaxis, :]
    return self._e

  def taus(self):
    r"""
    Calculates the temperature dependent interaction parameters between all subgroup pairs.

    .. math::
      \tau_{mn} = \exp \left( \frac{-a_{mn}}{T} \right)

    where :math:`a_{mn}` is the interaction energy parameter between subgroups :math:`m` and :math:`n`.
    Subgroup pairs without a published parameter have :math:`a_{mn} = 0`, so :math:`\tau_{mn} = 1`.

    :return: interaction parameter matrix with shape (56, 56)
    :rtype: numpy.ndarray
    """
    # may overflow to inf at low T for negative a_mn; caught in gammas()
    with np.errstate(over="ignore"):
      self._taus = np.exp(-UFIP / self.T)
    return self._taus

  def betas(self):
    r"""
    Calculates how strongly subgroup :math:`k` interacts with the subgroups of molecule :math:`i`.

    .. math::
      \beta_{ik} = \sum_m e_{mi} \tau_{mk}

    Only subgroups present in the mixture enter the sum, since :math:`e_{mi} = 0` for the rest.

    :return: matrix with shape (N, 56)
    :rtype: numpy.ndarray
    """
    try:
      self._e
    except AttributeError:
      self.e()
    try:
      self._taus
    except AttributeError:
      self.taus()
    present = self._unique_groups - 1
    with np.errstate(over="ignore", invalid="ignore"):
      self._betas = self._e[present].T @ self._taus[present]
    return self._betas

  def Thetas(self):
    r"""
    Calculates the area fraction, :math:`\Theta_k`, for subgroup :math:`k` in the entire mixture.

    .. math::
      \Theta_k = \frac{\sum_i x_i q_i e_{ki}}{\sum_j x_j q_j}

    :return: matrix of area fractions with shape (compositions, 56)
    :rtype: numpy.ndarray
    """
    try:
      self._e
    except AttributeError:
      self.e()
    self._Thetas = ((self.z * self._q) @ self._e.T) / (self.z @ self._q)[:, np.newaxis]
    return self._Thetas

  def s(self):
    r"""
    .. math::
      s_k = \sum_m \Theta_m \tau_{mk}

    :return: matrix with shape (compositions, 56)
    :rtype: numpy.ndarray
    """
    try:
      self._Thetas
    except AttributeError:
      self.Thetas()
    try:
      self._taus
    except AttributeError:
      self.taus()
    present = self._unique_groups - 1
    with np.errstate(over="ignore", invalid="ignore"):
      self._s = self._Thetas[:, present] @ self._taus[present]
    return self._s

  def rbar(self):
    r"""
    .. math::
        \overline{r} = \sum_j^N x_j r_j
    """
    try:
      self._r
    except AttributeError:
      self.r()
    self._rbar = self.z @ self._r
    return self._rbar

  def Vis(self):
    r"""
    Calculates the volume term, :math:`L_i`, for molecule :math:`i` in the mixture.

    .. math::
        L_i = \frac{r_i}{\sum_j^N x_j r_j}

    :return: array of volume terms for each molecule
    :rtype: numpy.ndarray
    """
    try:
      self._rbar
    except AttributeError:
      self.rbar()
    self._Vis = self._r / self._rbar[:, np.newaxis]
    return self._Vis

  def qbar(self):
    r"""
    .. math::
        \overline{q} = \sum_j^N x_j q_j
    """
    try:
      self._q
    except AttributeError:
      self.q()
    self._qbar = self.z @ self._q
    return self._qbar

  def Ais(self):
    r"""
    Calculates the area term, :math:`J_i`, for molecule :math:`i` in the mixture.

    .. math::
        J_i = \frac{q_i}{\sum_j^N x_j q_j}

    :return: array of area terms for each molecule
    :rtype: numpy.ndarray
    """
    try:
      self._qbar
    except AttributeError:
      self.qbar()
    self._Ais = self._q / self._qbar[:, np.newaxis]
    return self._Ais

  def lngammas_c(self):
    r"""
    Calculates the combinatorial contribution (:math:`\gamma_i^C`) to the activity coefficient of molecule :math:`i` in a mixture.
    This accounts for differences in molecular size and shape between molecules.

    .. math::
      \ln \gamma_i^C = 1 - J_i + \ln J_i - \frac{z}{2} q_i \left( 1 - \frac{J_i}{L_i} + \ln \frac{J_i}{L_i} \right)

    where :math:`z` is the coordination number, :func:`zc`.

    :return: array of combinatorial contributions
    :rtype: numpy.ndarray
    """
    try:
      self._Vis
    except AttributeError:
      self.Vis()
    try:
      self._Ais
    except AttributeError:
      self.Ais()
    J, L = self._Ais, self._Vis
    self._lngammas_c = 1 - J + np.log(J) - (self.zc / 2) * self._q * (1 - (J / L) + np.log(J / L))
    return self._lngammas_c

  def lngammas_r(self):
    r"""
    Calculates the residual contribution (:math:`\gamma_i^R`) to the activity coefficient of molecule :math:`i` in a mixture.
    This accounts for energetic interactions between subgroups.

    .. math::
      \ln \gamma_i^R = q_i \left( 1 - \sum_k \left[ \Theta_k \frac{\beta_{ik}}{s_k} - e_{ki} \ln \frac{\beta_{ik}}{s_k} \right] \right)

    Subgroups absent from the mixture have :math:`\Theta_k = e_{ki} = 0` and do not contribute.

    :return: array of residual contributions
    :rtype: numpy.ndarray
    """
    try:
      self._betas
    except AttributeError:
      self.betas()
    try:
      self._s
    except AttributeError:
      self.s()
    try:
      self._unique_groups
    except AttributeError:
      self.unique_groups()

    present = self._unique_groups - 1
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
      ratio = self._betas[np.newaxis, :, present] / self._s[:, np.newaxis, present]  # shape: (S, N, M)
      Theta_ratio = self._Thetas[:, np.newaxis, present] * ratio
      e_log_ratio = xlogy(self._e[present].T[np.newaxis, :, :], ratio)
      self._lngammas_r = self._q * (1 - np.sum(Theta_ratio - e_log_ratio, axis=2))
    return self._lngammas_r

  def gammas(self):
    r"""
    Total activity coefficients of molecule :math:`i` in a mixture, combining the combinatorial and residual contributions.

    .. math::
      \gamma_i = \exp \left( \ln \gamma_i^C + \ln \gamma_i^R \right)

    :return: array of activity coefficients with shape (compositions, N)
    :rtype: numpy.ndarray
    """
    try:
      self._lngammas_c
    except AttributeError:
      self.lngammas_c()
    try:
      self._lngammas_r
    except AttributeError:
      self.lngammas_r()
    with np.errstate(over="ignore", invalid="ignore"):
      gammas = np.exp(self._lngammas_c + self._lngammas_r)
    if not np.all(np.isfinite(gammas) & (gammas > 0)):
      raise InvalidTemperatureError(
        f"T = {self.T} K is too low for the interaction energies of subgroups {self._unique_groups.tolist()}; "
        "activity coefficients are not finite"
      )
    self._gammas = gammas
    return self._gammas

  def GE(self):
    r"""
    Gibbs excess energy of the mixture.

    .. math::
      G^E = RT \sum_{i}^N x_i \ln \gamma_i

    :return: array of Gibbs excess energy (kJ/mol)
    :rtype: numpy.ndarray
    """
    try:
      self._gammas
    except AttributeError:
      self.gammas()
    self._GE = self.Rc * self.T * np.sum(self.z * np.log(self._gammas), axis=1)
    return self._GE

  def GM(self):
    r"""
    Gibbs mixing free energy of the mixture.

    .. math::
      \Delta G_{mix} = RT \sum_{i}^N x_i \ln \left( x_i \gamma_i \right)

    Molecules with :math:`x_i = 0` contribute nothing.

    :return: array of Gibbs mixing free energy (kJ/mol)
    :rtype: numpy.ndarray
    """
    try:
      self._gammas
    except AttributeError:
      self.gammas()
    self._GM = self.Rc * self.T * np.sum(xlogy(self.z, self.z) + self.z * np.log(self._gammas), axis=1)
    return self._GM


def activity_coefficients(nu, x, T: float, check_mole_fractions=True, strict_interactions=False, xtol=MOLE_FRACTION_TOL):
  r"""
  Calculates UNIFAC activity coefficients for the molecules of a liquid mixture.

  :param nu: subgroup occurrences, as a (56, N) matrix where element (:math:`k-1`, :math:`i`) is
    the number of times subgroup :math:`k` appears in molecule :math:`i`, or as a list of
    ``{subgroup ID: occurrences}`` dictionaries
  :type nu: numpy.ndarray or list[dict[int, int]]
  :param x: liquid mol fractions, shape (N,) or (compositions, N)
  :type x: numpy.ndarray
  :param T: temperature (K)
  :type T: float
  :param check_mole_fractions: reject mol fractions that do not sum to 1 within ``xtol``
  :type check_mole_fractions: bool, optional
  :param strict_interactions: reject mixtures with subgroup pairs that have no published interaction parameter
  :type strict_interactions: bool, optional
  :param xtol: absolute tolerance on the sum of mol fractions
  :type xtol: float, optional
  :return: activity coefficients, with the same shape as ``x``
  :rtype: numpy.ndarray

  >>> nu = np.zeros((56, 2))
  >>> nu[0, 0], nu[1, 0], nu[32, 0] = 2, 1, 1
  >>> nu[0, 1], nu[1, 1] = 2, 5
  >>> activity_coefficients(nu, [0.4, 0.6], 308.15).round(3)
  array([1.135, 1.048])
  """
  model = UNIFAC(T, nu, x, check_mole_fractions=check_mole_fractions, strict_interactions=strict_interactions, xtol=xtol)
  gammas = model.gammas()
  if np.ndim(x) == 1:
    return gammas[0]
  return gammas
