"""
Constants declarations for geoformulae
"""

import sys

# Mean Earth Radius (meters), used by the spherical models
EARTH_RADIUS = 6_371_000.0

# Tolerance for floating point comparisons
EPSILON = sys.float_info.epsilon

# Unit conversions, applied as multipliers to a distance in meters
METRES_TO_KM = 1 / 1000
METRES_TO_MILES = 1 / 1609.344
METRES_TO_NAUTICAL_MILES = 1 / 1852

# Vincenty iteration guards
VINCENTY_MAX_ITERATIONS = 200
VINCENTY_CONVERGENCE = 1e-12
