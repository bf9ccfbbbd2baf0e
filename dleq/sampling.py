"""
Uniform sampling of scalars modulo a group order.

Reducing a random string modulo the order would skew the distribution towards small values
whenever the order is not a power of two. Instead, we draw as many bits as the order has and
start over whenever the result is out of range.
"""

import logging
import secrets

from petlib.bn import Bn

from dleq.consts import MAX_SAMPLING_ROUNDS, SCALAR_MASKS
from dleq.exceptions import EntropySourceError


logger = logging.getLogger(__name__)


def random_scalar(group, entropy_source=None):
    """
    Draw a scalar uniformly at random from :math:`[0, n)`, where :math:`n` is the group order.

    The only capability required from ``group`` is ``order()``.

    >>> from petlib.ec import EcGroup
    >>> group = EcGroup(713)
    >>> raw, s = random_scalar(group)
    >>> s < group.order()
    True
    >>> Bn.from_binary(raw) == s
    True

    Args:
        group: Group whose order bounds the scalar.
        entropy_source: Callable taking a number of bytes and returning that many random
            bytes. Defaults to :py:func:`secrets.token_bytes`. Any exception it raises is
            propagated unchanged.

    Returns:
        tuple: The big-endian byte string of the scalar and the scalar itself.

    Raises:
        EntropySourceError: If the source returns short reads, or never yields a value below
            the order within ``MAX_SAMPLING_ROUNDS`` attempts.
    """
    if entropy_source is None:
        entropy_source = secrets.token_bytes

    order = group.order()
    bit_size = order.num_bits()
    byte_size = (bit_size + 7) // 8
    mask = SCALAR_MASKS[bit_size % 8]

    for rejected in range(MAX_SAMPLING_ROUNDS):
        buf = bytearray(entropy_source(byte_size))
        if len(buf) != byte_size:
            raise EntropySourceError(
                "Entropy source returned {} bytes, expected {}".format(
                    len(buf), byte_size
                )
            )

        # Drop the bits above the bit length of the order.
        buf[0] &= mask
        scalar = Bn.from_binary(bytes(buf))
        if scalar < order:
            if rejected:
                logger.debug("Scalar accepted after %d rejected draws", rejected)
            return bytes(buf), scalar

    raise EntropySourceError(
        "No scalar below the group order after {} draws".format(MAX_SAMPLING_ROUNDS)
    )
