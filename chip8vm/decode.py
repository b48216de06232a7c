"""CHIP-8 instruction decoding and disassembly."""

from chex import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    """16-bit instruction split into its nibble fields."""
    raw: int
    opcode: int  # High nibble, selects the family
    x: int       # VX selector
    y: int       # VY selector
    n: int       # Low nibble
    nn: int      # Low byte
    nnn: int     # Low 12 bits (address)


def decode(instruction: int) -> DecodedInstruction:
    """Split an instruction into its fields.

    Works on Python ints as well as traced JAX integers.
    """
    return DecodedInstruction(
        raw=instruction,
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )


_ALU_MNEMONICS = {
    0x0: "LD", 0x1: "OR", 0x2: "AND", 0x3: "XOR", 0x4: "ADD",
    0x5: "SUB", 0x6: "SHR", 0x7: "SUBN", 0xE: "SHL",
}

_MISC_FORMATS = {
    0x07: "LD V{x:X}, DT",
    0x0A: "LD V{x:X}, K",
    0x15: "LD DT, V{x:X}",
    0x18: "LD ST, V{x:X}",
    0x1E: "ADD I, V{x:X}",
    0x29: "LD F, V{x:X}",
    0x33: "LD B, V{x:X}",
    0x55: "LD [I], V{x:X}",
    0x65: "LD V{x:X}, [I]",
}


def disassemble(instruction: int) -> str:
    """Render a host-side instruction as assembly text, e.g. ``LD V1, 0x42``.

    Unrecognized encodings are rendered as ``DW 0xNNNN``.
    """
    d = decode(int(instruction))
    x, y, n, nn, nnn = d.x, d.y, d.n, d.nn, d.nnn

    if d.raw == 0x00E0:
        return "CLS"
    if d.raw == 0x00EE:
        return "RET"
    if d.opcode == 0x1:
        return f"JP 0x{nnn:03X}"
    if d.opcode == 0x2:
        return f"CALL 0x{nnn:03X}"
    if d.opcode == 0x3:
        return f"SE V{x:X}, 0x{nn:02X}"
    if d.opcode == 0x4:
        return f"SNE V{x:X}, 0x{nn:02X}"
    if d.opcode == 0x5 and n == 0:
        return f"SE V{x:X}, V{y:X}"
    if d.opcode == 0x6:
        return f"LD V{x:X}, 0x{nn:02X}"
    if d.opcode == 0x7:
        return f"ADD V{x:X}, 0x{nn:02X}"
    if d.opcode == 0x8 and n in _ALU_MNEMONICS:
        return f"{_ALU_MNEMONICS[n]} V{x:X}, V{y:X}"
    if d.opcode == 0x9 and n == 0:
        return f"SNE V{x:X}, V{y:X}"
    if d.opcode == 0xA:
        return f"LD I, 0x{nnn:03X}"
    if d.opcode == 0xB:
        return f"JP V0, 0x{nnn:03X}"
    if d.opcode == 0xC:
        return f"RND V{x:X}, 0x{nn:02X}"
    if d.opcode == 0xD:
        return f"DRW V{x:X}, V{y:X}, {n}"
    if d.opcode == 0xE and nn == 0x9E:
        return f"SKP V{x:X}"
    if d.opcode == 0xE and nn == 0xA1:
        return f"SKNP V{x:X}"
    if d.opcode == 0xF and nn in _MISC_FORMATS:
        return _MISC_FORMATS[nn].format(x=x)
    return f"DW 0x{d.raw:04X}"
