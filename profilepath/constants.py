# Two points closer than this are the same point of a resolved chain
POINT_TOLERANCE = 1e-8

# A line whose x-extent is below this is vertical
VERTICAL_TOLERANCE = 1e-7
# |dy / dx| above this is treated as vertical as well
NEAR_VERTICAL_SLOPE = 1e10

# p/q discriminants down to -DISCRIMINANT_TOLERANCE count as tangency
DISCRIMINANT_TOLERANCE = 1e-12

# Sampled points closer than this to the segment start are dropped
SAMPLE_TOLERANCE = 1e-9

RAY_LENGTH = 1000.0  # length of provisional rays emulating infinite lines
DEFAULT_RESOLUTION = 0.1
