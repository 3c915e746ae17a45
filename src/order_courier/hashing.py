import hashlib


def key_to_int64(key: str) -> int:
    """
    Convert a string key into a stable signed 64-bit integer.

    Lock backends that index a fixed array of locks need an integer for every
    application key (e.g. "stock:Pizza"). Python's built-in ``hash`` is salted
    per process for strings, so two runs would spread the same keys
    differently; a digest keeps the mapping reproducible.

    Implementation details
    ----------------------
    BLAKE2b with an 8-byte digest, read big-endian and shifted into the
    signed range (-2^63 to 2^63-1).

    Parameters
    ----------
    key : str
        Arbitrary lock key string.

    Returns
    -------
    int
        Signed 64-bit integer.
    """
    digest = hashlib.blake2b(key.encode("utf-8"), digest_size=8).digest()

    value = int.from_bytes(digest, byteorder="big", signed=False)

    # unsigned -> signed int64
    if value >= 2**63:
        value -= 2**64

    return value
