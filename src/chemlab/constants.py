"""Default canvas constants for the chemistry playground."""

CLUSTER_THRESHOLD = 50.0  # canvas units; items this close (inclusive) react
BREAK_JITTER = 20.0  # max offset per axis for constituents of a broken compound
PRODUCT_SPREAD = 12.0  # radius of the ring co-produced compounds are placed on
