import math
import secrets
import hashlib

from dleq.point import Point


def get_random_point(group, random_bits=256, seed=None):
    """
    Generate a random point whose discrete logarithm is unknown.

    The point is obtained by hashing random bytes onto the curve, so nobody knows its
    discrete logarithm with respect to any other generator.

    Args:
        group: Group
        random_bits: Number of bits of a random string to create a point.
        seed: Optional integer seed, for reproducible points.

    >>> from petlib.ec import EcGroup
    >>> group = EcGroup(713)
    >>> a = get_random_point(group)
    >>> b = get_random_point(group)
    >>> a.is_on_curve() and b.is_on_curve()
    True
    >>> a != b
    True
    >>> get_random_point(group, seed=1) == get_random_point(group, seed=1)
    True
    """
    num_bytes = math.ceil(random_bits / 8)
    if seed is None:
        randomness = secrets.token_bytes(num_bytes)
    else:
        randomness = hashlib.sha512(b"%i" % seed).digest()[:num_bytes]

    return Point.from_ec_point(group.hash_to_point(randomness))


def make_generators(num, group, random_bits=256, seed=42):
    """
    Create some random group generators.

    .. WARNING ::

        There is a negligible chance that some generators will be the same.

    Args:
        num: Number of generators to generate.
        group: Group
        random_bits: Number of bits of a random number used to create a generator.
        seed: Seed of the first generator, or None for fresh randomness.

    >>> from petlib.ec import EcGroup
    >>> generators = make_generators(3, EcGroup(713))
    >>> len(generators) == 3
    True
    >>> isinstance(generators[0], Point)
    True
    """
    generators = [
        get_random_point(
            group, random_bits, seed=seed + i if seed is not None else None
        )
        for i in range(num)
    ]
    return generators
