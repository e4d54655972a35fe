"""Order ID generator.

IDs look like `order-1718000000000-k3j9x0q2a`: millisecond timestamp plus a
random base36 suffix. Uniqueness is the only contract; callers must not parse them.
"""

import secrets
import string
import threading
import time

_ALPHABET = string.digits + string.ascii_lowercase


class OrderIdGenerator:
    """Time-based ID generator with a random suffix.

    The suffix alone carries ~46 bits of entropy; a per-process counter is
    mixed in so two IDs generated in the same millisecond never collide locally.
    """

    _SUFFIX_LENGTH = 9

    def __init__(self, prefix: str = "order") -> None:
        self._prefix = prefix
        self._last_timestamp_ms = -1
        self._sequence = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            ts = self._current_ms()
            if ts == self._last_timestamp_ms:
                self._sequence += 1
            else:
                self._sequence = 0
            self._last_timestamp_ms = ts
            suffix = self._random_suffix()
            if self._sequence:
                suffix = f"{suffix}{self._sequence:x}"
            return f"{self._prefix}-{ts}-{suffix}"

    def _current_ms(self) -> int:
        return int(time.time() * 1000)

    def _random_suffix(self) -> str:
        return "".join(secrets.choice(_ALPHABET) for _ in range(self._SUFFIX_LENGTH))


_default_generator = OrderIdGenerator()


def generate_order_id() -> str:
    """Generate a unique order ID using the module-level default generator."""
    return _default_generator.next_id()
