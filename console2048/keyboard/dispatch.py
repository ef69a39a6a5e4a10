"""
Key-to-callback dispatch.

A callback receives the decoded key and answers with a Signal telling the
dispatch loop what happened:
    QUIT       (< 0)  stop the loop
    NO_CHANGE  (= 0)  nothing visible changed, skip the redraw
    CHANGED    (> 0)  state changed, redraw
An unregistered key is reported as None, never as NO_CHANGE.
"""

import logging
from enum import IntEnum

logger = logging.getLogger(__name__)


class Signal(IntEnum):
    QUIT = -1
    NO_CHANGE = 0
    CHANGED = 1

    @classmethod
    def from_value(cls, value):
        """Coerces a callback's integer (or bool) return value by its sign."""
        if value < 0:
            return cls.QUIT
        if value > 0:
            return cls.CHANGED
        return cls.NO_CHANGE


class KeyDispatchTable:
    """Maps each Key to at most one callback. Registering a key again replaces it."""

    def __init__(self):
        self._callbacks = {}

    def register(self, key, callback):
        self._callbacks[key] = callback

    def copy(self, target, source):
        """Registers `target` with the callback already bound to `source`."""
        self._callbacks[target] = self._callbacks[source]

    def unregister(self, key):
        self._callbacks.pop(key, None)

    def is_registered(self, key) -> bool:
        return key in self._callbacks

    def reset(self):
        self._callbacks.clear()

    def __len__(self):
        return len(self._callbacks)

    def dispatch_once(self, decoder):
        """
        Decodes one key and runs its callback.

        Returns:
            Signal | None: The callback's signal, or None if the key is not registered.
        """
        key = decoder.decode()
        callback = self._callbacks.get(key)
        if callback is None:
            logger.debug("ignored unregistered key %s", key)
            return None
        return Signal.from_value(callback(key))

    def dispatch_at_least_one(self, decoder) -> Signal:
        """Keeps decoding until a registered key has been dispatched."""
        while True:
            signal = self.dispatch_once(decoder)
            if signal is not None:
                return signal

    def dispatch_until_signal(self, decoder) -> Signal:
        """
        Keeps dispatching until a callback reports CHANGED or QUIT.

        Unregistered keys and NO_CHANGE results keep the loop going.
        """
        while True:
            signal = self.dispatch_once(decoder)
            if signal is not None and signal != Signal.NO_CHANGE:
                return signal


def wait_for_key(decoder, key):
    """Blocks until `key` is pressed."""
    return wait_for_keys(decoder, (key,))


def wait_for_keys(decoder, keys):
    """Blocks until one of `keys` is pressed and returns it. Other keys are ignored."""
    while True:
        key = decoder.decode()
        if key in keys:
            return key


def wait_any_key(decoder):
    return decoder.decode()
