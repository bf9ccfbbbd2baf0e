from dleq.utils.misc import ensure_bn
