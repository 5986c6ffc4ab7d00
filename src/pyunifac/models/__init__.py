""" thermodynamic models """


from .unifac import UNIFAC, activity_coefficients, occurance_matrix_from_subgroups, MOLE_FRACTION_TOL


__all__ = [
	"UNIFAC",
	"activity_coefficients",
	"occurance_matrix_from_subgroups",
	"MOLE_FRACTION_TOL",
]
