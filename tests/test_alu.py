"""Tests for ALU operations (8xxx)."""

import pytest
from chip8vm import execute


def with_registers(state, **registers):
    """Set registers by name, e.g. ``with_registers(state, V1=0x10, VF=1)``."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


class TestBasicALU:
    """Test basic ALU operations."""

    def test_alu_set_basic(self, fresh_state):
        """8XY0 - Set VX = VY."""
        state = with_registers(fresh_state, V1=0x42, V2=0x99)

        state = execute(state, 0x8120)  # V1 = V2

        assert state.V[1] == 0x99
        assert state.V[2] == 0x99

    def test_alu_or_basic(self, fresh_state):
        """8XY1 - OR operation."""
        state = with_registers(fresh_state, V1=0xF0, V2=0x0F)

        state = execute(state, 0x8121)  # V1 |= V2

        assert state.V[1] == 0xFF

    def test_alu_and_basic(self, fresh_state):
        """8XY2 - AND operation."""
        state = with_registers(fresh_state, V1=0xF0, V2=0xF1)

        state = execute(state, 0x8122)  # V1 &= V2

        assert state.V[1] == 0xF0

    def test_alu_xor_same(self, fresh_state):
        """8XY3 - XOR with same value should be 0."""
        state = with_registers(fresh_state, V3=0xAA, V4=0xAA)

        state = execute(state, 0x8343)  # V3 ^= V4

        assert state.V[3] == 0x00

    @pytest.mark.parametrize("instruction", [0x8120, 0x8121, 0x8122, 0x8123])
    def test_logic_ops_leave_vf_alone(self, fresh_state, instruction):
        """8XY0-8XY3 never touch VF."""
        state = with_registers(fresh_state, V1=0x0F, V2=0xF0, VF=0x07)

        state = execute(state, instruction)

        assert state.V[15] == 0x07

    def test_logic_op_can_target_vf(self, fresh_state):
        """8FY0 writes VF like any other register."""
        state = with_registers(fresh_state, V2=0x33, VF=0x01)

        state = execute(state, 0x8F20)

        assert state.V[15] == 0x33


class TestALUArithmetic:
    """Test arithmetic ALU operations."""

    def test_alu_add_no_carry(self, fresh_state):
        """8XY4 - Add without carry."""
        state = with_registers(fresh_state, V1=0x01, V2=0x01, VF=1)

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 2
        assert state.V[15] == 0

    def test_alu_add_with_carry(self, fresh_state):
        """8XY4 - 250 + 10 wraps to 4 with carry."""
        state = execute(fresh_state, 0x61FA)  # V1 = 250
        state = execute(state, 0x620A)  # V2 = 10

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 4
        assert state.V[15] == 1

    def test_alu_add_exact_255_no_carry(self, fresh_state):
        """8XY4 - A sum of exactly 255 does not carry."""
        state = with_registers(fresh_state, V1=0xF0, V2=0x0F)

        state = execute(state, 0x8124)

        assert state.V[1] == 0xFF
        assert state.V[15] == 0

    def test_alu_sub_xy_no_borrow(self, fresh_state):
        """8XY5 - 10 - 5 = 5, VF = 1."""
        state = with_registers(fresh_state, V1=10, V2=5)

        state = execute(state, 0x8125)  # V1 -= V2

        assert state.V[1] == 5
        assert state.V[15] == 1

    def test_alu_sub_xy_with_borrow(self, fresh_state):
        """8XY5 - 5 - 10 wraps to 251, VF = 0."""
        state = with_registers(fresh_state, V1=5, V2=10)

        state = execute(state, 0x8125)

        assert state.V[1] == 251
        assert state.V[15] == 0

    def test_alu_sub_xy_equal_operands(self, fresh_state):
        """8XY5 - Equal operands give 0 and VF = 0 (strictly greater required)."""
        state = with_registers(fresh_state, V1=0x30, V2=0x30, VF=1)

        state = execute(state, 0x8125)

        assert state.V[1] == 0
        assert state.V[15] == 0

    def test_alu_sub_yx_no_borrow(self, fresh_state):
        """8XY7 - Subtract VY - VX, no borrow."""
        state = with_registers(fresh_state, V1=0x10, V2=0x30)

        state = execute(state, 0x8127)  # V1 = V2 - V1

        assert state.V[1] == 0x20
        assert state.V[15] == 1

    def test_alu_sub_yx_with_borrow(self, fresh_state):
        """8XY7 - VY < VX wraps and clears VF."""
        state = with_registers(fresh_state, V1=0x30, V2=0x10, VF=1)

        state = execute(state, 0x8127)

        assert state.V[1] == 0xE0
        assert state.V[15] == 0


class TestALUShifts:
    """Test shift operations."""

    def test_shift_right_even(self, fresh_state):
        """8XY6 - Shift right, even number; VY is ignored."""
        state = with_registers(fresh_state, V1=0x04, V2=0xFF)

        state = execute(state, 0x8126)  # V1 >>= 1

        assert state.V[1] == 0x02
        assert state.V[15] == 0

    def test_shift_right_odd(self, fresh_state):
        """8XY6 - Shift right, odd number."""
        state = with_registers(fresh_state, V3=0x05, V4=0xFF)

        state = execute(state, 0x8346)  # V3 >>= 1

        assert state.V[3] == 0x02
        assert state.V[15] == 1

    def test_shift_left_overflow(self, fresh_state):
        """8XYE - Shift left with high bit set; VF is normalized to 1."""
        state = with_registers(fresh_state, V3=0x81, V4=0xFF)

        state = execute(state, 0x834E)  # V3 <<= 1

        assert state.V[3] == 0x02
        assert state.V[15] == 1

    def test_shift_left_no_overflow(self, fresh_state):
        """8XYE - Shift left with high bit clear."""
        state = with_registers(fresh_state, V3=0x41, VF=1)

        state = execute(state, 0x834E)

        assert state.V[3] == 0x82
        assert state.V[15] == 0


class TestALUEdgeCases:
    """Test edge cases and comprehensive scenarios."""

    @pytest.mark.parametrize("op", [0x8, 0x9, 0xA, 0xB, 0xC, 0xD, 0xF])
    def test_alu_undefined_operations(self, fresh_state, op):
        """Undefined 8XYN encodings are no-ops."""
        state = with_registers(fresh_state, V1=0x42, V2=0x99, VF=0x07)

        state = execute(state, 0x8120 | op)

        assert state.V[1] == 0x42, f"Undefined op {op:X} changed VX"
        assert state.V[15] == 0x07, f"Undefined op {op:X} changed VF"

    def test_alu_self_operations(self, fresh_state):
        """Test operations where VX and VY are the same register."""
        state = with_registers(fresh_state, V5=0xAA)

        state = execute(state, 0x8553)
        assert state.V[5] == 0x00, "Self XOR should result in 0"

        state = with_registers(state, V5=0x80)
        state = execute(state, 0x8554)  # V5 += V5
        assert state.V[5] == 0x00, "Self ADD should wrap on overflow"
        assert state.V[15] == 1, "Self ADD should set carry flag"

    def test_vf_register_operations(self, fresh_state):
        """VF as a source operand, then overwritten by the flag."""
        state = with_registers(fresh_state, VF=0x42, V1=0x10)

        state = execute(state, 0x81F4)  # V1 += VF
        assert state.V[1] == 0x52, "Addition with VF as source failed"
        assert state.V[15] == 0, "VF should be overwritten by operation result"

    def test_flag_wins_when_vf_is_destination(self, fresh_state):
        """8FY4 - The carry flag overrides the sum written to VF."""
        state = with_registers(fresh_state, VF=0xFF, V1=0x02)

        state = execute(state, 0x8F14)

        assert state.V[15] == 1
