"""CHIP-8 stack operations.

The pointer is clamped to ``[0, STACK_SIZE]``: a push onto a full stack is
dropped and a pop from an empty stack yields the (cleared) bottom slot.
"""

import jax.numpy as jnp
from chip8vm.constants import STACK_SIZE
from chip8vm.state import StackState


def push(stack: StackState, address: jnp.ndarray) -> StackState:
    """Push address onto stack."""
    is_full = stack.pointer >= STACK_SIZE
    slot = jnp.minimum(stack.pointer, STACK_SIZE - 1)
    new_data = jnp.where(is_full, stack.data, stack.data.at[slot].set(jnp.astype(address, jnp.uint16)))
    new_pointer = jnp.astype(jnp.minimum(stack.pointer + 1, STACK_SIZE), jnp.int32)
    return stack.replace(data=new_data, pointer=new_pointer)


def pop(stack: StackState) -> tuple[StackState, jnp.ndarray]:
    """Pop address from stack."""
    new_pointer = jnp.astype(jnp.maximum(stack.pointer - 1, 0), jnp.int32)
    popped_address = stack.data[new_pointer]
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address


def depth(stack: StackState) -> int:
    """Number of return addresses currently on the stack."""
    return int(stack.pointer)
