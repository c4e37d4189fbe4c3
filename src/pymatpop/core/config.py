"""Default numerical settings.

Every operation accepts keyword arguments overriding these values.
"""

# Tolerance for U + F == A and for survival column sums <= 1
DEFAULT_TOLERANCE = 1e-8

# Relative tolerance when comparing eigenvalue magnitudes for ties
EIGEN_TIE_TOLERANCE = 1e-10

# Imaginary parts below this (relative to |lambda|) are treated as zero
COMPLEX_TOLERANCE = 1e-10

# Sums below this are treated as zero when normalizing vectors
DEGENERATE_SUM_TOLERANCE = 1e-12

# Default transient horizon is this many multiples of the matrix dimension
HORIZON_MULTIPLIER = 10

# Ratios within this distance of 1 count as "no amplification/attenuation"
TRANSIENT_TOLERANCE = 1e-8

# |log(lambda)| at or below this makes generation time undefined
GENERATION_TIME_TOLERANCE = 1e-12

# Batches with at least this many initial vectors use the parallel kernel
PARALLEL_BATCH_THRESHOLD = 64
