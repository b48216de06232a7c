"""Tests for instruction decoding and disassembly."""

import pytest
from chip8vm import decode, disassemble


def test_decode_fields():
    decoded = decode(0xD12F)

    assert decoded.raw == 0xD12F
    assert decoded.opcode == 0xD
    assert decoded.x == 0x1
    assert decoded.y == 0x2
    assert decoded.n == 0xF
    assert decoded.nn == 0x2F
    assert decoded.nnn == 0x12F


@pytest.mark.parametrize("instruction, text", [
    (0x00E0, "CLS"),
    (0x00EE, "RET"),
    (0x1234, "JP 0x234"),
    (0x2ABC, "CALL 0xABC"),
    (0x3A10, "SE VA, 0x10"),
    (0x5120, "SE V1, V2"),
    (0x8AB4, "ADD VA, VB"),
    (0x812E, "SHL V1, V2"),
    (0xB300, "JP V0, 0x300"),
    (0xD125, "DRW V1, V2, 5"),
    (0xE39E, "SKP V3"),
    (0xF40A, "LD V4, K"),
    (0xF733, "LD B, V7"),
])
def test_disassemble(instruction, text):
    assert disassemble(instruction) == text


@pytest.mark.parametrize("instruction", [0x5001, 0x812F, 0xE0FF, 0xF0FF, 0x0123])
def test_disassemble_unknown(instruction):
    assert disassemble(instruction) == f"DW 0x{instruction:04X}"
