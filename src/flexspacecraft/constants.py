"""
The `constants` module defines the mathematical and physical constants used by the simulator.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

# Earth Constants
"""
Earth's equatorial radius. Units: *m*

References:

1. _GGM05s - Combined Gravity Model_, The University of Texas at Austin, 2013
"""
R_EARTH = 6.378136300e6  # [m] GGM05s Value

"""
Earth's Gravitational constant. Units: *m^3/s^2*

References:

1. _GGM05s - Combined Gravity Model_, The University of Texas at Austin, 2013
"""
GM_EARTH = 3.986004415e14  # [m^3/s^2] GGM05s Value
