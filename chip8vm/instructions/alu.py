"""CHIP-8 ALU operations (8xxx).

Each operation maps ``(vx, vy) -> (result, flag)``. Only the operations
listed in ``FLAG_OPS`` write VF; for those the flag is written after the
result, so VF holds the flag even when X is F.
"""

import jax
import jax.lax
import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import DecodedInstruction

_NO_FLAG = jnp.zeros((), dtype=jnp.uint8)

VALID_OPS = jnp.array([1, 1, 1, 1, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 1, 0], dtype=bool)
FLAG_OPS = jnp.array([0, 0, 0, 0, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 1, 0], dtype=bool)


def alu_set(vx: int, vy: int) -> tuple[int, int]:
    """8XY0 - Set: VX = VY."""
    return vy, _NO_FLAG


def alu_or(vx: int, vy: int) -> tuple[int, int]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, _NO_FLAG


def alu_and(vx: int, vy: int) -> tuple[int, int]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, _NO_FLAG


def alu_xor(vx: int, vy: int) -> tuple[int, int]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, _NO_FLAG


def alu_add(vx: int, vy: int) -> tuple[int, int]:
    """8XY4 - Add: VX += VY, VF = carry."""
    result = jnp.astype(vx, jnp.int32) + jnp.astype(vy, jnp.int32)
    carry = jnp.astype(result > 255, jnp.uint8)
    return jnp.astype(result & 0xFF, jnp.uint8), carry


def alu_sub_xy(vx: int, vy: int) -> tuple[int, int]:
    """8XY5 - Subtract: VX -= VY, VF = 1 if VX > VY."""
    no_borrow = jnp.astype(vx > vy, jnp.uint8)
    result = jnp.astype(vx, jnp.int32) - jnp.astype(vy, jnp.int32)
    return jnp.astype(result & 0xFF, jnp.uint8), no_borrow


def alu_shift_right(vx: int, vy: int) -> tuple[int, int]:
    """8XY6 - Shift right: VX >>= 1, VF = old bit 0."""
    shifted_bit = jnp.astype(vx & 1, jnp.uint8)
    return jnp.astype(vx >> 1, jnp.uint8), shifted_bit


def alu_sub_yx(vx: int, vy: int) -> tuple[int, int]:
    """8XY7 - Subtract: VX = VY - VX, VF = 1 if VY > VX."""
    no_borrow = jnp.astype(vy > vx, jnp.uint8)
    result = jnp.astype(vy, jnp.int32) - jnp.astype(vx, jnp.int32)
    return jnp.astype(result & 0xFF, jnp.uint8), no_borrow


def alu_shift_left(vx: int, vy: int) -> tuple[int, int]:
    """8XYE - Shift left: VX <<= 1, VF = old bit 7 as 0/1."""
    shifted_bit = jnp.astype((vx & 0x80) >> 7, jnp.uint8)
    result = (jnp.astype(vx, jnp.int32) << 1) & 0xFF
    return jnp.astype(result, jnp.uint8), shifted_bit


def execute_alu_operation(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    vx = state.V[instruction.x]
    vy = state.V[instruction.y]

    result, vf = jax.lax.cond(
        VALID_OPS[instruction.n],
        lambda: jax.lax.switch(
            # Map only valid operations: 0,1,2,3,4,5,6,7,14 -> 0,1,2,3,4,5,6,7,8
            jnp.where(instruction.n == 14, 8, instruction.n),
            [alu_set, alu_or, alu_and, alu_xor, alu_add,
             alu_sub_xy, alu_shift_right, alu_sub_yx, alu_shift_left],
            vx, vy
        ),
        lambda: (vx, _NO_FLAG)
    )

    new_V = state.V.at[instruction.x].set(result)
    new_V = jnp.where(FLAG_OPS[instruction.n], new_V.at[15].set(vf), new_V)
    return state.replace(V=new_V)
