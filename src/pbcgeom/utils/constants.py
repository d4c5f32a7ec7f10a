# src/pbcgeom/utils/constants.py

"""Central constants used across pbcgeom.

All values are defaults; the cutoff can be overridden per call.
"""

import math

# Geometry
DIMENSION = 3  # Spatial dimension of every position
DEGREES_PER_RADIAN = 180.0 / math.pi

# Numerical safeguards
VERYSMALL_F = 1.0e-14  # Distance kept from the arccos/arcsin domain boundary

# Cutoffs
MAXFLOAT = 1.0e10  # Squared-distance cutoff that never excludes a pair
