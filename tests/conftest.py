"""Test configuration and fixtures for CHIP-8 interpreter tests."""

import pytest
import jax.numpy as jnp
from chip8vm import create_state, Interpreter
from chip8vm.logging import ConsoleLogger


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def quiet_logger():
    """Logger that only reports errors."""
    return ConsoleLogger("test", log_level="ERROR", use_colors=False)


@pytest.fixture
def make_interpreter(quiet_logger):
    """Build an interpreter over a list of 16-bit instructions."""
    def _make(program, **kwargs):
        kwargs.setdefault("logger", quiet_logger)
        return Interpreter(program_bytes(program), **kwargs)
    return _make


def program_bytes(instructions):
    """Encode 16-bit instructions big-endian."""
    return b"".join(instruction.to_bytes(2, "big") for instruction in instructions)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


class FakeKeypad:
    """Scripted ``KeyInput``: fixed held keys and a queue of key presses."""

    def __init__(self, held=(), presses=()):
        self.held = set(held)
        self.presses = list(presses)
        self.waits = 0

    def is_pressed(self, key):
        return key in self.held

    def wait_for_key(self, cancel):
        self.waits += 1
        if not self.presses:
            cancel.cancel()
            return None
        return self.presses.pop(0)
