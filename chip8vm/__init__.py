"""CHIP-8 interpreter package."""

from chip8vm.state import EmulatorState, StackState, create_state
from chip8vm.emulator import execute, load_rom, read_rom, fetch, decrement_timers
from chip8vm.decode import DecodedInstruction, decode, disassemble
from chip8vm.interpreter import Interpreter
from chip8vm.keypad import CancellationToken, KeyInput, NullKeypad
from chip8vm.errors import (
    Chip8Error, RomLoadError, RomTooLargeError, ProgramCounterOverflow, KeyWaitCancelled
)
from chip8vm.constants import *
from chip8vm.rendering import chip8_display_to_rgb, create_color_scheme

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "load_rom",
    "read_rom",
    "decrement_timers",
    "DecodedInstruction",
    "decode",
    "disassemble",
    "Interpreter",
    "CancellationToken",
    "KeyInput",
    "NullKeypad",
    "Chip8Error",
    "RomLoadError",
    "RomTooLargeError",
    "ProgramCounterOverflow",
    "KeyWaitCancelled",
    "PROGRAM_START",
    "FONT_START",
    "FONT_DATA",
    "MEMORY_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "STACK_SIZE",
    "EMULATION_IPS",
    "TIMER_PERIOD_NS",
    "chip8_display_to_rgb",
    "create_color_scheme",
]
