import logging

import attr
import pytest

from petlib.bn import Bn

from dleq import Proof, Point, new_proof, verify_proof
from dleq.exceptions import (
    InconsistentCurvesError,
    PointOffCurveError,
    UnsupportedHashError,
)
from dleq.utils.groups import make_generators


@pytest.fixture
def statement(group):
    g, m = make_generators(2, group)
    x = group.order().random()
    return g, g.mul(x), m, m.mul(x), x


@pytest.fixture
def proof(statement):
    g, h, m, z, x = statement
    return new_proof("sha256", g, h, m, z, x)


@pytest.mark.parametrize("hash_name", ["sha256", "sha512", "sha3_256", "blake2b"])
def test_valid_proof(statement, hash_name):
    g, h, m, z, x = statement
    proof = new_proof(hash_name, g, h, m, z, x)
    assert proof.hash_name == hash_name
    assert proof.verify()
    assert verify_proof(proof)


def test_valid_proof_with_group_generator(group):
    g = Point.from_ec_point(group.generator())
    m, = make_generators(1, group)
    x = 1337
    assert new_proof("sha256", g, g.mul(x), m, m.mul(x), x).verify()


def test_invalid_proof(statement):
    g, h, m, _, x = statement
    n = g.group.order().random()
    # Using Z = nM instead.
    proof = new_proof("sha256", g, h, m, m.mul(n), x)
    assert not proof.verify()


def test_proof_for_other_statement(proof, group):
    other_g, other_m = make_generators(2, group, seed=1000)
    forged = attr.evolve(proof, g=other_g, m=other_m)
    assert not forged.verify()


def test_swapped_public_values(proof):
    assert not attr.evolve(proof, h=proof.z, z=proof.h).verify()


def test_secret_reduced_modulo_order(statement):
    g, h, m, z, x = statement
    order = g.group.order()
    assert new_proof("sha256", g, h, m, z, int(x) + int(order)).verify()
    assert new_proof("sha256", g, h, m, z, int(x) - int(order)).verify()


def test_inconsistent_curves(statement, other_group):
    g, h, m, z, x = statement
    other_m = Point.from_ec_point(other_group.generator())
    with pytest.raises(InconsistentCurvesError):
        new_proof("sha256", g, h, other_m, z, x)
    with pytest.raises(InconsistentCurvesError):
        new_proof("sha256", g, h, m, other_m.mul(x), x)


def test_point_off_curve(statement):
    g, h, m, z, x = statement
    off_curve = Point(z.group, z.x, z.y + Bn(1))
    with pytest.raises(PointOffCurveError):
        new_proof("sha256", g, h, m, off_curve, x)


def test_point_at_infinity_rejected(statement):
    g, h, m, z, x = statement
    with pytest.raises(PointOffCurveError):
        new_proof("sha256", g, h, m, m.mul(0), x)


@pytest.mark.parametrize("hash_name", ["shake_128", "not-a-hash", None])
def test_unsupported_hash(statement, hash_name):
    g, h, m, z, x = statement
    with pytest.raises(UnsupportedHashError):
        new_proof(hash_name, g, h, m, z, x)


def _flip_bit(value, bit):
    return int(value) ^ (1 << bit)


def test_tampered_response(proof):
    num_bits = proof.group.order().num_bits()
    for bit in list(range(0, num_bits, 5)) + [num_bits - 1]:
        tampered = attr.evolve(proof, r=_flip_bit(proof.r, bit))
        assert not tampered.verify()


def test_tampered_challenge(proof):
    num_bits = proof.group.order().num_bits()
    for bit in list(range(0, num_bits, 5)) + [num_bits - 1]:
        tampered = attr.evolve(proof, c=_flip_bit(proof.c, bit))
        assert not tampered.verify()


def test_tampered_hash_name(proof):
    assert not attr.evolve(proof, hash_name="sha512").verify()


def test_deterministic_with_injected_entropy(statement):
    g, h, m, z, x = statement

    def source(num_bytes):
        return b"\x01" * num_bytes

    proof1 = new_proof("sha256", g, h, m, z, x, entropy_source=source)
    proof2 = new_proof("sha256", g, h, m, z, x, entropy_source=source)
    assert proof1 == proof2
    assert proof1.verify()


def test_fresh_randomness_per_proof(statement):
    g, h, m, z, x = statement
    proof1 = new_proof("sha256", g, h, m, z, x)
    proof2 = new_proof("sha256", g, h, m, z, x)
    assert proof1.r != proof2.r
    assert proof1.c != proof2.c


def test_verification_is_idempotent(proof):
    assert all(proof.verify() for _ in range(3))
    bad = attr.evolve(proof, c=proof.c.mod_add(Bn(1), proof.group.order()))
    assert not any(bad.verify() for _ in range(3))


def test_incomplete_proof(proof):
    incomplete = Proof(g=proof.g, m=proof.m, h=proof.h, z=proof.z, r=proof.r)
    assert not incomplete.is_complete()
    assert not incomplete.verify()
    assert not Proof().verify()


def test_complete_and_sane(proof):
    assert proof.is_complete()
    assert proof.is_sane()


def test_scalars_out_of_range(proof):
    order = proof.group.order()
    assert not attr.evolve(proof, r=int(proof.r) + int(order)).verify()
    assert not attr.evolve(proof, c=int(proof.c) + int(order)).verify()
    assert not attr.evolve(proof, r=-1).verify()


def test_mixed_curves_in_proof(proof, other_group):
    other_m = Point.from_ec_point(other_group.generator())
    mixed = attr.evolve(proof, m=other_m)
    assert not mixed.is_sane()
    assert not mixed.verify()


def test_off_curve_point_in_proof(proof):
    off_curve = Point(proof.z.group, proof.z.x, proof.z.y + Bn(1))
    tampered = attr.evolve(proof, z=off_curve)
    assert not tampered.is_sane()
    assert not tampered.verify()


def test_not_a_point_in_proof(proof):
    assert not attr.evolve(proof, g=proof.g.marshal()).verify()


def test_proof_is_immutable(proof):
    with pytest.raises(AttributeError):
        proof.r = Bn(0)


def test_proof_holds_no_secret(proof):
    names = {field.name for field in attr.fields(Proof)}
    assert names == {"g", "m", "h", "z", "r", "c", "hash_name"}


def test_secret_is_not_logged(statement, caplog):
    g, h, m, z, x = statement
    with caplog.at_level(logging.DEBUG, logger="dleq"):
        proof = new_proof("sha256", g, h, m, z, x)
        attr.evolve(proof, c=Bn(0)).verify()
    assert caplog.records
    assert str(int(x)) not in caplog.text
    assert x.hex() not in caplog.text


@pytest.mark.parametrize("bad_group", [None, "secp256k1", 713])
def test_point_without_curve_in_proof(proof, bad_group):
    detached = Point(bad_group, 1, 2)
    assert not attr.evolve(proof, g=detached).is_sane()
    assert not attr.evolve(proof, g=detached).verify()
    assert not attr.evolve(proof, m=detached, z=detached).verify()
