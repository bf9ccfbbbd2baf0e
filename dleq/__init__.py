__version__ = "0.1.0"
__title__ = "dleq"
__author__ = "dleq contributors"
__email__ = "dleq@users.noreply.github.com"
__url__ = "https://github.com/dleq/dleq"
__license__ = "MIT"
__description__ = "Non-interactive Chaum-Pedersen proofs of discrete logarithm equality on elliptic curves."
__copyright__ = "2020, dleq contributors"


from dleq.point import Point
from dleq.proof import Proof, new_proof, verify_proof
from dleq.sampling import random_scalar
from dleq.utils.groups import make_generators
