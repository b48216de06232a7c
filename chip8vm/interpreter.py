"""Real-time CHIP-8 interpreter core.

``Interpreter.cycle(now)`` is called once per host iteration with a
monotonic nanosecond timestamp. Two independent gates share it:

* the timer gate ticks the delay/sound timers at 60 Hz;
* the instruction gate runs at most one instruction per call once an
  instruction period has elapsed.

Missed instruction periods are not caught up: when the host stalls,
throughput drops instead of executing a burst.
"""

from typing import Optional

import jax
import jax.numpy as jnp
import numpy as np

from chip8vm.constants import (
    EMULATION_IPS, MEMORY_SIZE, NANOS_PER_SECOND, STACK_SIZE, TIMER_PERIOD_NS
)
from chip8vm.decode import decode, disassemble
from chip8vm.emulator import execute, fetch, load_rom, decrement_timers
from chip8vm.errors import KeyWaitCancelled, ProgramCounterOverflow
from chip8vm.keypad import CancellationToken, KeyInput, NullKeypad
from chip8vm.logging import ConsoleLogger, get_logger
from chip8vm.state import EmulatorState, create_state
from chip8vm.stack import depth

_fetch = jax.jit(fetch)
_execute = jax.jit(execute)
_decrement_timers = jax.jit(decrement_timers)


class Interpreter:
    """Owns all machine state and exposes output signals to the host."""

    def __init__(
        self,
        rom: bytes,
        instructions_per_second: int = EMULATION_IPS,
        start_time: int = 0,
        keypad: Optional[KeyInput] = None,
        seed: int = 0,
        logger: Optional[ConsoleLogger] = None,
        debug: bool = False,
    ):
        """Build a fresh machine with the font and ``rom`` loaded.

        Args:
            rom: Raw ROM image, copied to 0x200
            instructions_per_second: Instruction rate, must be positive
            start_time: Timestamp (ns) that seeds both gates
            keypad: Input capability; defaults to a ``NullKeypad``
            seed: Seed for the CXNN random source
            logger: Logger; built from ``debug`` when omitted
            debug: Log every executed instruction
        """
        if instructions_per_second <= 0:
            raise ValueError(f"instructions_per_second must be positive, got {instructions_per_second}")

        self.logger = logger if logger is not None else get_logger(debug=debug)
        self.debug = debug
        self.keypad = keypad if keypad is not None else NullKeypad()

        state = create_state(jax.random.PRNGKey(seed))
        self.logger.debug("Fonts loaded in memory")
        self._state = load_rom(state, rom)
        self.logger.info(f"Loaded ROM ({len(rom)} bytes), {instructions_per_second} instructions/s")

        self.instruction_period = NANOS_PER_SECOND // instructions_per_second
        self.last_timer_tick = start_time
        self.last_instruction_tick = start_time
        self.instruction_count = 0

        self._clear_requested = False
        self._display_dirty = False
        self._beep_active = False

    @property
    def state(self) -> EmulatorState:
        return self._state

    @property
    def display(self) -> np.ndarray:
        """Read-only (32, 64) snapshot of the display buffer."""
        snapshot = np.array(self._state.display, dtype=np.bool_)
        snapshot.setflags(write=False)
        return snapshot

    @property
    def should_clear_screen(self) -> bool:
        return self._clear_requested

    @property
    def should_update_screen(self) -> bool:
        return self._display_dirty

    @property
    def should_beep(self) -> bool:
        return self._beep_active

    def cycle(self, now: int, cancel: Optional[CancellationToken] = None):
        """Advance timers and/or run one instruction for timestamp ``now``."""
        self._clear_requested = False
        self._display_dirty = False

        if now - self.last_timer_tick >= TIMER_PERIOD_NS:
            self._state = _decrement_timers(self._state)
            self.last_timer_tick = now

        if now - self.last_instruction_tick >= self.instruction_period:
            self.step(cancel)
            self.last_instruction_tick = now

        self._beep_active = int(self._state.sound_timer) > 0

    def step(self, cancel: Optional[CancellationToken] = None):
        """Fetch, decode and execute exactly one instruction.

        Raises:
            ProgramCounterOverflow: the PC points past the end of memory
            KeyWaitCancelled: an FX0A wait was cancelled; nothing is committed
        """
        pc = int(self._state.pc)
        if pc + 1 >= MEMORY_SIZE:
            raise ProgramCounterOverflow("Reached end of memory", pc=pc)

        state, instruction = _fetch(self._state)
        raw = int(instruction)
        decoded = decode(raw)

        if self.debug:
            self.logger.debug(f"0x{pc:03X}: {raw:04X}  {disassemble(raw)}")

        if decoded.opcode == 0xE:
            state = state.replace(keypad=self._held_keys())
        elif decoded.opcode == 0xF and decoded.nn == 0x0A:
            key = self._wait_for_key(cancel, pc)
            state = state.replace(keypad=jnp.arange(16) == key)

        self._check_stack(raw, pc)

        self._state = _execute(state, instruction)
        self.instruction_count += 1

        if raw == 0x00E0:
            self._clear_requested = True
        elif decoded.opcode == 0xD:
            self._display_dirty = True

    def _held_keys(self) -> jnp.ndarray:
        return jnp.array([bool(self.keypad.is_pressed(key)) for key in range(16)], dtype=jnp.bool_)

    def _wait_for_key(self, cancel: Optional[CancellationToken], pc: int) -> int:
        cancel = cancel if cancel is not None else CancellationToken()
        key = None if cancel.cancelled else self.keypad.wait_for_key(cancel)
        if key is None or cancel.cancelled:
            raise KeyWaitCancelled("Key wait cancelled", pc=pc)
        if not 0 <= key <= 0xF:
            raise ValueError(f"Keypad returned out-of-range key {key!r}")
        return key

    def _check_stack(self, raw: int, pc: int):
        if raw & 0xF000 == 0x2000 and depth(self._state.stack) >= STACK_SIZE:
            self.logger.warning(f"Stack overflow at 0x{pc:03X}: call to 0x{raw & 0xFFF:03X} not recorded")
        elif raw == 0x00EE and depth(self._state.stack) == 0:
            self.logger.warning(f"Stack underflow at 0x{pc:03X}: returning to 0x000")
