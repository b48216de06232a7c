"""Input capability injected into the interpreter.

The interpreter never talks to an input library directly. It asks a
``KeyInput`` whether a key is held (EX9E/EXA1) and blocks on it for the
next key press (FX0A).
"""

from typing import Optional, Protocol, runtime_checkable


class CancellationToken:
    """Flag shared between the host and a blocking key wait."""

    def __init__(self):
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


@runtime_checkable
class KeyInput(Protocol):
    """Narrow view of an input device over the 16-key hex keypad."""

    def is_pressed(self, key: int) -> bool:
        """Return whether hex key ``key`` (0x0-0xF) is currently held."""
        ...

    def wait_for_key(self, cancel: CancellationToken) -> Optional[int]:
        """Block until a mapped key goes down and return its value.

        Returns ``None`` (after cancelling ``cancel``) when a reserved key
        or a quit request ends the wait instead.
        """
        ...


class NullKeypad:
    """Keypad with nothing attached: no key is ever held and waits end at once."""

    def is_pressed(self, key: int) -> bool:
        return False

    def wait_for_key(self, cancel: CancellationToken) -> Optional[int]:
        cancel.cancel()
        return None
