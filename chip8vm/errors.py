"""Exceptions raised by the CHIP-8 interpreter and its host."""

from typing import Optional


class Chip8Error(Exception):
    """Base exception for all interpreter errors."""

    def __init__(self, message: str, pc: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.pc = pc

    def __str__(self) -> str:
        if self.pc is None:
            return self.message
        return f"{self.message} (pc=0x{self.pc:04X})"


class RomLoadError(Chip8Error):
    """ROM could not be read from its source."""
    pass


class RomTooLargeError(RomLoadError):
    """ROM does not fit in memory above the program start address."""
    pass


class ProgramCounterOverflow(Chip8Error):
    """Program counter ran past the end of addressable memory."""
    pass


class KeyWaitCancelled(Chip8Error):
    """Blocking key wait (FX0A) was cancelled by the input source."""
    pass
