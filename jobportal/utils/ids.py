# jobportal/utils/ids.py
import random
import string
import time

_ALPHABET = string.digits + string.ascii_lowercase
_RANDOM_LEN = 9


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    out = []
    while n:
        n, rem = divmod(n, 36)
        out.append(_ALPHABET[rem])
    return "".join(reversed(out))


def generate_id() -> str:
    """Random base36 prefix followed by the current time in base36 milliseconds.

    Unique enough for an application-sized dataset; not a security token.
    """
    prefix = "".join(random.choices(_ALPHABET, k=_RANDOM_LEN))
    return prefix + _base36(int(time.time() * 1000))
