"""Tests for the state containers."""

import jax.numpy as jnp
from chip8vm import EmulatorState, StackState, create_state
from chip8vm.stack import push


def test_default_stack():
    stack = StackState()
    assert stack.data.shape == (16,)
    assert stack.data.dtype == jnp.uint16
    assert stack.pointer == 0


def test_states_do_not_share_defaults():
    first = create_state()
    second = create_state()
    first = first.replace(stack=push(first.stack, 0x300))

    assert first.stack.pointer == 1
    assert second.stack.pointer == 0
    assert second.stack.data[0] == 0


def test_default_state_fields():
    state = EmulatorState(jnp.zeros(2, dtype=jnp.uint32))

    assert state.pc == 0x200
    assert state.pc.dtype == jnp.uint16
    assert state.display.shape == (32, 64)
    assert state.memory.shape == (4096,)
    assert not state.keypad.any()
