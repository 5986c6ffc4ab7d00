import logging
from pathlib import Path
from types import MappingProxyType
import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

# read files for creating subgroup objects & interaction matrix
_here = Path(__file__).parent

# subgroup IDs follow the numbering of Smith, Van Ness & Abbott, Introduction to
# Chemical Engineering Thermodynamics, 7th Ed., pp. 791-7
NUM_SUBGROUPS = 56

_unif_subgroups = pd.read_csv(_here / "unifac_subgroups.csv", float_precision="round_trip").set_index("subgroup_id")
_unif_ip_blocks = pd.read_csv(_here / "unifac_ip_blocks.csv", float_precision="round_trip")

class UNIFAC_subgroup:
  # Creates object for UNIFAC subgroup parameters.

  # :param group_id: The unique identifier for the subgroup.
  # :type group_id: int
  # :param group: The formula of the subgroup.
  # :type group: str
  # :param main_group_id: The identifier for the main group to which this subgroup belongs.
  # :type main_group_id: int
  # :param main_group: The name of the main group to which this subgroup belongs.
  # :type main_group: str
  # :param R: The van der Waals volume parameter for the subgroup.
  # :type R: float
  # :param Q: The van der Waals surface area parameter for the subgroup.
  # :type Q: float

  __slots__ = ['group_id', 'group', 'main_group_id', 'main_group', 'R', 'Q']

  def __repr__(self):   # pragma: no cover
    return f'<{self.group}>'

  def __init__(self, group_id, group, main_group_id, main_group, R, Q):
    self.group_id = group_id
    self.group = group
    self.main_group_id = main_group_id
    self.main_group = main_group
    self.R = R
    self.Q = Q

# UFSG[subgroup ID] = UNIFAC_subgroup(formula, main group ID, main group, R, Q)
# only published subgroups are present, so unparameterised IDs raise KeyError
_UFSG = {}
for i in _unif_subgroups.index:
  _UFSG[int(i)] = UNIFAC_subgroup(
          group_id=int(i),
          group=str(_unif_subgroups["subgroup"][i]),
          main_group_id=int(_unif_subgroups["main_group_id"][i]),
          main_group=str(_unif_subgroups["main_group"][i]),
          R=float(_unif_subgroups["R"][i]),
          Q=float(_unif_subgroups["Q"][i]),
  )
UFSG = MappingProxyType(_UFSG)


def _dense_vector(attr: str):
  r"""
  Spread a subgroup attribute over a dense vector, where index ``k-1`` holds subgroup ``k``.
  Unparameterised subgroups are left at zero.
  """
  vec = np.zeros(NUM_SUBGROUPS)
  for group_id, subgroup in UFSG.items():
    vec[group_id - 1] = getattr(subgroup, attr)
  vec.setflags(write=False)
  return vec

R = _dense_vector("R")
Q = _dense_vector("Q")

# main group of each subgroup position, 0 where no subgroup is defined
MAIN_GROUP = np.zeros(NUM_SUBGROUPS, dtype=int)
for _group_id, _subgroup in UFSG.items():
  MAIN_GROUP[_group_id - 1] = _subgroup.main_group_id
MAIN_GROUP.setflags(write=False)


def build_interaction_matrix(blocks):
  r"""
  Assemble the subgroup interaction energy matrix, :math:`a_{mn}` (K), from block assignments.

  Each block assigns a single value to the inclusive 1-based ranges
  ``row_start:row_end`` x ``col_start:col_end``. Blocks are applied in order, so a later
  assignment overwrites any cells of an earlier one that it intersects. Cells that never
  receive a value stay at zero.

  :param blocks: table with columns ``row_start``, ``row_end``, ``col_start``, ``col_end`` and ``a``
  :type blocks: pandas.DataFrame
  :return: interaction matrix and boolean mask of published cells
  :rtype: tuple[numpy.ndarray, numpy.ndarray]
  """
  a = np.zeros((NUM_SUBGROUPS, NUM_SUBGROUPS))
  published = np.zeros((NUM_SUBGROUPS, NUM_SUBGROUPS), dtype=bool)
  for block in blocks.itertuples(index=False):
    rows = slice(int(block.row_start) - 1, int(block.row_end))
    cols = slice(int(block.col_start) - 1, int(block.col_end))
    if published[rows, cols].any():
      logger.debug(f"interaction block a[{block.row_start}:{block.row_end}, {block.col_start}:{block.col_end}] overrides earlier entries")
    a[rows, cols] = float(block.a)
    published[rows, cols] = True
  return a, published

UFIP, UFIP_PUBLISHED = build_interaction_matrix(_unif_ip_blocks)
UFIP.setflags(write=False)
UFIP_PUBLISHED.setflags(write=False)


def interaction_parameter(m: int, n: int):
  r"""
  Interaction energy parameter, :math:`a_{mn}`, between subgroup :math:`m` and :math:`n`.

  :param m: subgroup ID of the first subgroup
  :type m: int
  :param n: subgroup ID of the second subgroup
  :type n: int
  :return: interaction energy parameter (K); zero if no parameter is published
  :rtype: float
  """
  for group_id in (m, n):
    if group_id not in UFSG:
      raise KeyError(f"subgroup {group_id} has no UNIFAC parameters")
  return float(UFIP[m - 1, n - 1])


def missing_interactions(group_ids):
  r"""
  Find ordered pairs of subgroups from different main groups that have no published interaction parameter.

  :param group_ids: subgroup IDs present in a mixture
  :type group_ids: list[int]
  :return: list of ``(m, n)`` subgroup ID pairs
  :rtype: list[tuple[int, int]]
  """
  missing = []
  for m in group_ids:
    for n in group_ids:
      if MAIN_GROUP[m - 1] == MAIN_GROUP[n - 1]:
        continue
      if not UFIP_PUBLISHED[m - 1, n - 1]:
        missing.append((int(m), int(n)))
  return missing
