from petlib.bn import Bn


def ensure_bn(x):
    """
    Ensure that value is big number.

    Python integers of any size are accepted.

    >>> isinstance(ensure_bn(42), Bn)
    True
    >>> isinstance(ensure_bn(Bn(42)), Bn)
    True
    >>> ensure_bn(2 ** 300) == Bn.from_decimal(str(2 ** 300))
    True
    """
    if isinstance(x, Bn):
        return x
    if isinstance(x, int) and not isinstance(x, bool):
        return Bn.from_decimal(str(x))
    raise TypeError("Expected an integer, got {}".format(type(x).__name__))
