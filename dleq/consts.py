"""
Library-wide constants.
"""

# Hash used when the caller does not pick one.
DEFAULT_HASH = "sha256"

# Masks for the most significant byte of a sampled scalar, indexed by
# ``bit_length % 8``. Entry ``i`` keeps the ``i`` low bits (all 8 for ``i == 0``).
SCALAR_MASKS = (0xFF, 0x01, 0x03, 0x07, 0x0F, 0x1F, 0x3F, 0x7F)

# Upper bound on rejection-sampling rounds. An honest source is rejected with
# probability below 1/2 per round.
MAX_SAMPLING_ROUNDS = 128

# SEC1 prefix of an uncompressed point encoding.
UNCOMPRESSED_POINT_PREFIX = 0x04
