r"""
Non-interactive proof of equality of two discrete logarithms.

.. math::

    PK\{ (x): H = x G \land Z = x M \}

This is the protocol from "`Wallet Databases with Observers`_" by Chaum and Pedersen, 1992,
made non-interactive with the Fiat-Shamir heuristic.

The commitments :math:`A = sG` and :math:`B = sM` are hashed together with the statement to
obtain the challenge. The verifier recomputes them from the response and the challenge and
compares the *hash* instead of the group elements, so the proof is only :math:`(R, C)` on top of
the statement.

>>> from petlib.ec import EcGroup
>>> from dleq.utils.groups import make_generators
>>> group = EcGroup(713)
>>> g, m = make_generators(2, group)
>>> x = group.order().random()
>>> proof = new_proof("sha256", g, g.mul(x), m, m.mul(x), x)
>>> proof.verify()
True

.. _`Wallet Databases with Observers`:
    https://link.springer.com/content/pdf/10.1007/3-540-48071-4_7.pdf
"""

import hmac
import hashlib
import logging

import attr
from petlib.bn import Bn
from petlib.ec import EcGroup

from dleq.consts import DEFAULT_HASH
from dleq.point import Point
from dleq.sampling import random_scalar
from dleq.utils.misc import ensure_bn
from dleq.exceptions import (
    InconsistentCurvesError,
    PointOffCurveError,
    UnsupportedHashError,
)


logger = logging.getLogger(__name__)


def new_hash(hash_name):
    """
    Instantiate a fixed-length hash function from :py:mod:`hashlib` by name.

    >>> new_hash("sha256").digest_size
    32

    Raises:
        UnsupportedHashError: If the name is unknown or the function is extendable-output.
    """
    try:
        hasher = hashlib.new(hash_name)
    except (TypeError, ValueError) as e:
        raise UnsupportedHashError("Unknown hash algorithm {!r}".format(hash_name)) from e

    # SHAKE functions report a digest size of zero.
    if hasher.digest_size == 0:
        raise UnsupportedHashError(
            "Hash algorithm {!r} has no fixed digest size".format(hash_name)
        )
    return hasher


def scalar_to_bytes(value, order):
    """
    Encode a scalar as unsigned big-endian bytes, as long as the encoding of the group order.

    >>> scalar_to_bytes(Bn(1), Bn(2 ** 16 + 1))
    b'\\x00\\x00\\x01'
    """
    size = (order.num_bits() + 7) // 8
    return value.binary().rjust(size, b"\x00")


def compute_challenge(hash_name, points, order):
    r"""
    Fiat-Shamir challenge: hash of the marshaled points, reduced modulo the group order.

    Both the prover and the verifier call this with
    :math:`(G, H, M, Z, A, B)`, in that order.

    Args:
        hash_name (str): Name of the hash function.
        points: Sequence of :py:class:`dleq.point.Point`.
        order (Bn): Group order.
    """
    hasher = new_hash(hash_name)
    for point in points:
        hasher.update(point.marshal())
    return Bn.from_binary(hasher.digest()) % order


@attr.s(frozen=True)
class Proof:
    r"""
    A proof that :math:`\log_G H = \log_M Z`.

    Args:
        g: Generator :math:`G`, known by both parties.
        m: Generator :math:`M`, known by both parties.
        h: Public value :math:`H = xG`.
        z: Public value :math:`Z = xM`.
        r: Response :math:`R = s - Cx \bmod n`.
        c: Challenge :math:`C`, the hash of the statement and the intermediate proof values.
        hash_name: Name of the hash function the challenge was computed with.
    """

    g = attr.ib(default=None)
    m = attr.ib(default=None)
    h = attr.ib(default=None)
    z = attr.ib(default=None)
    r = attr.ib(default=None, converter=attr.converters.optional(ensure_bn))
    c = attr.ib(default=None, converter=attr.converters.optional(ensure_bn))
    hash_name = attr.ib(default=DEFAULT_HASH)

    @property
    def group(self):
        return self.g.group

    @property
    def points(self):
        return (self.g, self.h, self.m, self.z)

    def is_complete(self):
        """Check that all the fields are populated."""
        return all(
            value is not None
            for value in (self.g, self.m, self.h, self.z, self.r, self.c, self.hash_name)
        )

    def is_sane(self):
        """
        Check the proof is well-formed.

        All points are on one and the same curve, the scalars are reduced modulo the group
        order, and the hash function is supported.
        """
        if not all(isinstance(point, Point) for point in self.points):
            return False
        if not all(isinstance(point.group, EcGroup) for point in self.points):
            return False
        if not self.g.same_group(self.h, self.m, self.z):
            return False
        if not all(point.is_on_curve() for point in self.points):
            return False

        order = self.group.order()
        zero = Bn(0)
        if not (zero <= self.r < order and zero <= self.c < order):
            return False

        try:
            new_hash(self.hash_name)
        except UnsupportedHashError:
            return False
        return True

    def verify(self):
        r"""
        Verify the proof.

        Recomputes :math:`A' = RG + CH` and :math:`B' = RM + CZ` and checks that hashing them
        with the statement yields :math:`C`. Malformed proofs are not valid, they do not raise.

        Returns:
            bool: True if the proof is valid, False otherwise.
        """
        if not self.is_complete():
            logger.debug("Rejecting incomplete proof")
            return False
        if not self.is_sane():
            logger.debug("Rejecting malformed proof")
            return False

        order = self.group.order()

        # a = (g^r)(h^c)
        a = self.g.mul(self.r) + self.h.mul(self.c)
        # b = (m^r)(z^c)
        b = self.m.mul(self.r) + self.z.mul(self.c)

        c_prime = compute_challenge(self.hash_name, self.points + (a, b), order)
        valid = hmac.compare_digest(
            scalar_to_bytes(c_prime, order), scalar_to_bytes(self.c, order)
        )
        if not valid:
            logger.debug("Rejecting proof: challenge mismatch")
        return valid


def new_proof(hash_name, g, h, m, z, x, entropy_source=None):
    r"""
    Prove that :math:`\log_G H = \log_M Z`.

    Given :math:`G, H, M, Z` such that :math:`G, M` are generators and :math:`H = xG`,
    :math:`Z = xM`. If :math:`(G, H, M, Z)` are already known to the verifier, then
    :math:`(C, R)` is sufficient to check the proof.

    Args:
        hash_name (str): Name of a :py:mod:`hashlib` hash function, e.g. ``"sha256"``.
        g, h, m, z (:py:class:`dleq.point.Point`): The statement.
        x: The secret discrete logarithm.
        entropy_source: Optional callable returning the requested number of random bytes.
            See :py:func:`dleq.sampling.random_scalar`.

    Returns:
        Proof: The proof.

    Raises:
        InconsistentCurvesError: If the points are on different curves.
        PointOffCurveError: If one of the points is off the curve.
        UnsupportedHashError: If the hash function cannot be used.
    """
    if not g.same_group(h, m, z):
        raise InconsistentCurvesError("Points are on different curves")
    if not all(point.is_on_curve() for point in (g, h, m, z)):
        raise PointOffCurveError("One of the points is off the curve")
    new_hash(hash_name)

    group = g.group
    order = group.order()
    x = ensure_bn(x) % order

    _, s = random_scalar(group, entropy_source)

    # (a, b) = (g^s, m^s)
    a = g.mul(s)
    b = m.mul(s)

    # Unlike the paper, the challenge commits to the whole statement, not only to (m, z).
    c = compute_challenge(hash_name, (g, h, m, z, a, b), order)

    # r = s - cx instead of s + cx, so the verifier needs no inversion of c.
    r = s.mod_sub(c.mod_mul(x, order), order)

    logger.debug(
        "Constructed DLEQ proof on curve %d using %s", group.nid(), hash_name
    )
    return Proof(g=g, m=m, h=h, z=z, r=r, c=c, hash_name=hash_name)


def verify_proof(proof):
    """Verify a :py:class:`Proof`. Equivalent to ``proof.verify()``."""
    return proof.verify()
