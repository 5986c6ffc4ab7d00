""" UNIFAC subgroup and interaction parameters """

from .unifac_subgroup_parameters import (
  UNIFAC_subgroup, UFSG, UFIP, UFIP_PUBLISHED, R, Q, MAIN_GROUP, NUM_SUBGROUPS,
  build_interaction_matrix, interaction_parameter, missing_interactions,
)

__all__ = [
  "UNIFAC_subgroup", "UFSG", "UFIP", "UFIP_PUBLISHED",
  "R", "Q", "MAIN_GROUP", "NUM_SUBGROUPS",
  "build_interaction_matrix", "interaction_parameter", "missing_interactions",
]
