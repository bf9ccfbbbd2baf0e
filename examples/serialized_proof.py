"""
Exchange a proof as JSON and check a proof produced by another implementation.
"""

from petlib.ec import EcGroup

from dleq import make_generators, new_proof
from dleq.serialization import dumps, loads

group = EcGroup(415)

# Proof over NIST P-256 with SHA-256, as produced by another implementation.
SERIALIZED_PROOF = (
    '{"G":"04e6acd2d48935e5dbe45cdc709523b33088cc765f43e4bf70d542b2c1d4a4e7544ede67d1efe8b3376d5d438eaf23f49a51cbc3a0d922b2c53885de02db040bd6",'
    '"M":"048fe6ed55b2f2f6e4bb38746de5caf9ca3d0c3ab3bd39f86ee6bcccc4d8d450f9f96ea563a9ae45844667671f19fd98ba33031fa29273c36d69b27cdcd472f708",'
    '"H":"04d9c8a7641580e9cca78838d0afbba182725117be905ff0498d9daaf39efa724fb1477942b81666ed5fbe57940f1549564819deefc7d27a24850a1694d8703af0",'
    '"Z":"0429be4a07716b1d47120584307e315ea46aa929c3f2aa48fdd99ac9d3586062c03981dbe2ba8d2b1f718867c70aec77f3a0caed3400f24f363449654072946241",'
    '"R":"91820766313758960872733821824367018256726753791189588926651185872630155795305",'
    '"C":"72708061045794318764113581497860336728677743598081579702100827525997798035809",'
    '"Hash":"sha256"}'
)

proof = loads(group, SERIALIZED_PROOF)
assert proof.verify()

# Round trip of a fresh proof.
g, m = make_generators(2, group)
x = group.order().random()
fresh = new_proof("sha256", g, g.mul(x), m, m.mul(x), x)
assert loads(group, dumps(fresh)) == fresh
