r"""
Affine elliptic-curve points with explicit curve membership checks.

A :py:class:`Point` wraps a ``petlib`` group and a pair of affine coordinates. Unlike
:py:class:`petlib.ec.EcPt`, it can hold coordinates that are *not* on the curve, so that
untrusted input can be decoded first and validated in a separate, explicit step:

>>> from petlib.ec import EcGroup
>>> group = EcGroup(713)
>>> g = Point.from_ec_point(group.generator())
>>> g.is_on_curve()
True
>>> Point(group, g.x, g.x).is_on_curve()
False
>>> Point.unmarshal(group, g.marshal()) == g
True

Arithmetic is delegated to the group provider:

>>> 3 * g == g + g + g
True
"""

import attr
from petlib.bn import Bn
from petlib.ec import EcPt

from dleq.consts import UNCOMPRESSED_POINT_PREFIX
from dleq.exceptions import InconsistentCurvesError, InvalidPointError
from dleq.utils.misc import ensure_bn


def field_byte_length(group):
    """Number of bytes needed for one coordinate of a point in ``group``."""
    p = group.parameters()["p"]
    return (p.num_bits() + 7) // 8


@attr.s(frozen=True, repr=False)
class Point:
    """
    A point given by its affine coordinates on a curve.

    The point at infinity has no affine form and is represented by the coordinates
    :math:`(0, 0)`, which are off every curve used here.

    Args:
        group (:py:class:`petlib.ec.EcGroup`): Curve the point belongs to.
        x: Affine x coordinate.
        y: Affine y coordinate.
    """

    group = attr.ib()
    x = attr.ib(converter=ensure_bn)
    y = attr.ib(converter=ensure_bn)

    @classmethod
    def from_ec_point(cls, pt):
        """Wrap a :py:class:`petlib.ec.EcPt`."""
        if pt.is_infinite():
            return cls(pt.group, Bn(0), Bn(0))
        x, y = pt.get_affine()
        return cls(pt.group, x, y)

    def to_ec_point(self):
        """
        Convert to a :py:class:`petlib.ec.EcPt` for use in group arithmetic.

        Only meaningful for points on the curve (or the point at infinity).
        """
        if self.is_infinite():
            return self.group.infinite()
        return EcPt.from_binary(self.marshal(), self.group)

    def is_infinite(self):
        return self.x == Bn(0) and self.y == Bn(0)

    def is_on_curve(self):
        r"""
        Check the point satisfies :math:`y^2 = x^3 + ax + b \bmod p`.

        Coordinates must also be reduced, i.e., lie in :math:`[0, p)`.
        """
        params = self.group.parameters()
        p, a, b = params["p"], params["a"], params["b"]

        zero = Bn(0)
        if self.x < zero or self.y < zero or self.x >= p or self.y >= p:
            return False

        lhs = self.y.mod_mul(self.y, p)
        rhs = self.x.mod_mul(self.x, p).mod_mul(self.x, p)
        rhs = rhs.mod_add(a.mod_mul(self.x, p), p)
        rhs = rhs.mod_add(b % p, p)
        return lhs == rhs

    def marshal(self):
        """
        Encode the point as ``0x04 || X || Y``, the SEC1 uncompressed form.

        Each coordinate is big-endian and left-padded to the byte length of the field
        prime, so the encoding has a fixed size for a given curve.
        """
        size = field_byte_length(self.group)
        return (
            bytes([UNCOMPRESSED_POINT_PREFIX])
            + self.x.binary().rjust(size, b"\x00")
            + self.y.binary().rjust(size, b"\x00")
        )

    @classmethod
    def unmarshal(cls, group, data):
        """
        Decode a point produced by :py:meth:`marshal`.

        The encoding is only checked for well-formedness. Curve membership must be
        checked separately with :py:meth:`is_on_curve` before the point is used.

        Args:
            group (:py:class:`petlib.ec.EcGroup`): Curve the point should belong to.
            data (bytes): Untrusted encoding.

        Raises:
            InvalidPointError: If the data is not a well-formed uncompressed point.
        """
        if not isinstance(data, (bytes, bytearray)):
            raise InvalidPointError("Expected bytes, got {}".format(type(data).__name__))

        size = field_byte_length(group)
        if len(data) != 1 + 2 * size:
            raise InvalidPointError(
                "Expected {} bytes, got {}".format(1 + 2 * size, len(data))
            )
        if data[0] != UNCOMPRESSED_POINT_PREFIX:
            raise InvalidPointError("Unsupported point prefix 0x{:02x}".format(data[0]))

        x = Bn.from_binary(bytes(data[1 : 1 + size]))
        y = Bn.from_binary(bytes(data[1 + size :]))
        p = group.parameters()["p"]
        if x >= p or y >= p:
            raise InvalidPointError("Coordinate is not reduced modulo the field prime")
        return cls(group, x, y)

    def same_group(self, *others):
        return all(self.group == other.group for other in others)

    def mul(self, scalar):
        """Scalar multiplication, with the scalar reduced modulo the group order."""
        scalar = ensure_bn(scalar) % self.group.order()
        return Point.from_ec_point(self.to_ec_point().pt_mul(scalar))

    def __rmul__(self, scalar):
        return self.mul(scalar)

    def __add__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        if not self.same_group(other):
            raise InconsistentCurvesError("Cannot add points from different curves")
        return Point.from_ec_point(self.to_ec_point().pt_add(other.to_ec_point()))

    def __repr__(self):
        return "Point(nid={}, {})".format(self.group.nid(), self.marshal().hex())
