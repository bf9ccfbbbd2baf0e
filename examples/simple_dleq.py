"""
Proof that two public values share a discrete logarithm:
PK{ (x): H = x * G and Z = x * M }
"""

from petlib.ec import EcGroup

from dleq import make_generators, new_proof

group = EcGroup(415)

# Two generators whose relative discrete logarithm nobody knows.
g, m = make_generators(2, group)

# The secret, and the two public values derived from it.
x = group.order().random()
h = g.mul(x)
z = m.mul(x)

proof = new_proof("sha256", g, h, m, z, x)
assert proof.verify()

# A different exponent on one side is caught.
bad_proof = new_proof("sha256", g, h, m, z + m, x)
assert not bad_proof.verify()
