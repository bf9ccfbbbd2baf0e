"""
Wire formats for :py:class:`dleq.proof.Proof`.

Two encodings are provided:

* JSON, an object with the four points as hex-encoded uncompressed points, the response and
  the challenge as decimal strings, and the name of the hash function::

    {"G": "04...", "M": "04...", "H": "04...", "Z": "04...",
     "R": "9182...", "C": "7270...", "Hash": "sha256"}

* msgpack, a compact array ``[hash, G, M, H, Z, R, C]`` of a string and byte strings, with
  the scalars encoded as fixed-width big-endian integers.

The curve is not part of either format and must be agreed upon out of band. Decoded proofs
are not trusted: :py:meth:`dleq.proof.Proof.verify` checks that the points are on the curve.
"""

import json
import binascii

import msgpack
from petlib.bn import Bn

from dleq.point import Point
from dleq.proof import Proof, scalar_to_bytes
from dleq.exceptions import SerializationError


POINT_KEYS = ("G", "M", "H", "Z")
SCALAR_KEYS = ("R", "C")
HASH_KEY = "Hash"


def proof_to_dict(proof):
    """Convert a proof to a JSON-compatible dictionary."""
    return {
        "G": proof.g.marshal().hex(),
        "M": proof.m.marshal().hex(),
        "H": proof.h.marshal().hex(),
        "Z": proof.z.marshal().hex(),
        "R": str(int(proof.r)),
        "C": str(int(proof.c)),
        HASH_KEY: proof.hash_name,
    }


def _decode_point(group, key, value):
    if not isinstance(value, str):
        raise SerializationError("Point {} should be a hex string".format(key))
    try:
        data = binascii.unhexlify(value)
    except (binascii.Error, ValueError) as e:
        raise SerializationError("Point {} is not valid hex".format(key)) from e
    return Point.unmarshal(group, data)


def _decode_scalar(key, value):
    if not isinstance(value, str) or not (value.isascii() and value.isdigit()):
        raise SerializationError(
            "Scalar {} should be a non-negative decimal string".format(key)
        )
    if len(value) > 1 and value.startswith("0"):
        raise SerializationError("Scalar {} has leading zeros".format(key))
    return Bn.from_decimal(value)


def proof_from_dict(group, data):
    """
    Build a proof from a dictionary produced by :py:func:`proof_to_dict`.

    Args:
        group (:py:class:`petlib.ec.EcGroup`): Curve of the proof.
        data (dict): Decoded JSON object.

    Raises:
        SerializationError: If a field is missing or malformed.
        InvalidPointError: If one of the points cannot be decoded.
    """
    if not isinstance(data, dict):
        raise SerializationError("Expected a JSON object")

    missing = [
        key for key in POINT_KEYS + SCALAR_KEYS + (HASH_KEY,) if key not in data
    ]
    if missing:
        raise SerializationError("Missing fields: {}".format(", ".join(missing)))

    if not isinstance(data[HASH_KEY], str):
        raise SerializationError("Hash should be a string")

    g, m, h, z = (_decode_point(group, key, data[key]) for key in POINT_KEYS)
    r, c = (_decode_scalar(key, data[key]) for key in SCALAR_KEYS)
    return Proof(g=g, m=m, h=h, z=z, r=r, c=c, hash_name=data[HASH_KEY])


def dumps(proof):
    """Serialize a proof to a JSON string."""
    return json.dumps(proof_to_dict(proof))


def loads(group, text):
    """Deserialize a proof from a JSON string. See :py:func:`proof_from_dict`."""
    try:
        data = json.loads(text)
    except ValueError as e:
        raise SerializationError("Invalid JSON") from e
    return proof_from_dict(group, data)


def pack(proof):
    """
    Serialize a proof with msgpack.

    >>> from petlib.ec import EcGroup
    >>> from dleq import make_generators, new_proof
    >>> group = EcGroup(713)
    >>> g, m = make_generators(2, group)
    >>> proof = new_proof("sha256", g, g.mul(5), m, m.mul(5), 5)
    >>> unpack(group, pack(proof)) == proof
    True
    """
    order = proof.group.order()
    return msgpack.packb(
        [
            proof.hash_name,
            proof.g.marshal(),
            proof.m.marshal(),
            proof.h.marshal(),
            proof.z.marshal(),
            scalar_to_bytes(proof.r, order),
            scalar_to_bytes(proof.c, order),
        ],
        use_bin_type=True,
    )


def unpack(group, data):
    """
    Deserialize a proof produced by :py:func:`pack`.

    Raises:
        SerializationError: If the data is not a well-formed packed proof.
        InvalidPointError: If one of the points cannot be decoded.
    """
    try:
        fields = msgpack.unpackb(data, raw=False)
    except (TypeError, ValueError, msgpack.UnpackException) as e:
        raise SerializationError("Invalid msgpack data") from e

    if not isinstance(fields, list) or len(fields) != 7:
        raise SerializationError("Expected an array of 7 fields")

    hash_name, *encoded = fields
    if not isinstance(hash_name, str) or not all(
        isinstance(value, bytes) for value in encoded
    ):
        raise SerializationError("Unexpected field types")

    size = (group.order().num_bits() + 7) // 8
    if not all(len(value) == size for value in encoded[4:]):
        raise SerializationError("Scalars should be {} bytes long".format(size))

    g, m, h, z = (Point.unmarshal(group, value) for value in encoded[:4])
    r, c = (Bn.from_binary(value) for value in encoded[4:])
    return Proof(g=g, m=m, h=h, z=z, r=r, c=c, hash_name=hash_name)
