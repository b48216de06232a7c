"""Tests for system instructions (0xxx) and state construction."""

import jax.numpy as jnp
import pytest
from chip8vm import (
    execute, fetch, load_rom, read_rom, create_state, decrement_timers,
    FONT_DATA, PROGRAM_START, RomLoadError, RomTooLargeError
)


def test_font_loaded_at_start(fresh_state):
    assert jnp.array_equal(fresh_state.memory[:80], FONT_DATA)
    assert fresh_state.pc == 0x200
    assert jnp.sum(fresh_state.memory[80:]) == 0


def test_execute_clear_screen(fresh_state):
    """00E0 - Clear display."""
    state = fresh_state.replace(display=jnp.ones_like(fresh_state.display))

    state = execute(state, 0x00E0)

    assert jnp.sum(state.display) == 0


def test_machine_routine_is_noop(fresh_state):
    """0NNN other than 00E0/00EE is ignored."""
    state = fresh_state.replace(display=fresh_state.display.at[0, 0].set(True))
    new_state = execute(state, 0x0123)

    assert new_state.display[0, 0] == 1
    assert new_state.pc == state.pc


def test_execute_call_and_return(fresh_state):
    """Test 2NNN (call) and 00EE (return) together."""
    state = execute(fresh_state, 0x2300)
    assert state.pc == 0x300
    assert state.stack.data[state.stack.pointer - 1] == 0x200

    state = execute(state, 0x00EE)
    assert state.pc == 0x200
    assert state.stack.pointer == 0


class TestFetch:

    def test_fetch_big_endian(self, fresh_state):
        state = load_rom(fresh_state, bytes([0x12, 0x34, 0xAB, 0xCD]))

        state, instruction = fetch(state)
        assert instruction == 0x1234
        assert state.pc == 0x202

        state, instruction = fetch(state)
        assert instruction == 0xABCD
        assert state.pc == 0x204


class TestRomLoading:

    def test_load_rom_at_program_start(self, fresh_state):
        state = load_rom(fresh_state, b"\x01\x02\x03")
        assert list(state.memory[PROGRAM_START:PROGRAM_START + 4]) == [1, 2, 3, 0]

    def test_largest_rom_fits(self, fresh_state):
        rom = bytes([0xAA]) * (4096 - PROGRAM_START)
        state = load_rom(fresh_state, rom)
        assert state.memory[4095] == 0xAA

    def test_rom_too_large(self, fresh_state):
        with pytest.raises(RomTooLargeError):
            load_rom(fresh_state, bytes(4096 - PROGRAM_START + 1))

    def test_read_rom(self, tmp_path):
        path = tmp_path / "game.ch8"
        path.write_bytes(b"\x00\xe0")
        assert read_rom(str(path)) == b"\x00\xe0"

    def test_read_missing_rom(self, tmp_path):
        with pytest.raises(RomLoadError, match="missing.ch8"):
            read_rom(str(tmp_path / "missing.ch8"))


def test_decrement_timers_floors_at_zero():
    state = create_state().replace(
        delay_timer=jnp.astype(2, jnp.uint8),
        sound_timer=jnp.astype(0, jnp.uint8),
    )
    state = decrement_timers(state)
    assert state.delay_timer == 1
    assert state.sound_timer == 0
