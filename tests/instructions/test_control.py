# tests/instructions/test_control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の検証。
"""
import pytest

from chip8_core.common.errors import AddressOutOfBounds, StackOverflow, StackUnderflow, UnsupportedOpcode
from chip8_core.instructions import Quirks

def test_jp(harness):
    harness.execute(0x1ABC)
    assert harness.state.program_counter == 0xABC

def test_jp_target_outside_small_memory(harness):
    harness.memory = bytearray(0x400)
    with pytest.raises(AddressOutOfBounds) as excinfo:
        harness.execute(0x1800)
    assert excinfo.value.address == 0x800
    assert excinfo.value.limit == 0x400
    # フェッチ後のPCのまま
    assert harness.state.program_counter == 0x202

def test_call_pushes_return_address(harness):
    harness.execute(0x2400, current_pc=0x200)
    state = harness.state
    assert state.program_counter == 0x400
    assert state.stack_pointer == 1
    assert state.call_stack[1] == 0x202

def test_ret_pops_return_address(harness):
    harness.state.push(0x20A)
    harness.execute(0x00EE, current_pc=0x400)
    assert harness.state.program_counter == 0x20A
    assert harness.state.stack_pointer == 0

def test_ret_on_empty_stack(harness):
    with pytest.raises(StackUnderflow):
        harness.execute(0x00EE)

# @intent:test_case_overflow スタック満杯時のCALLはStackOverflowとなり、PCはジャンプしないことを検証します。
def test_call_on_full_stack(harness):
    harness.state.stack_pointer = 15
    with pytest.raises(StackOverflow):
        harness.execute(0x2300, current_pc=0x200)
    assert harness.state.program_counter == 0x202
    assert harness.state.stack_pointer == 15

def test_sys_is_ignored(harness):
    harness.execute(0x0123)
    assert harness.state.program_counter == 0x202

@pytest.mark.parametrize("word, vx, taken", [
    (0x3A12, 0x12, True),
    (0x3A12, 0x13, False),
    (0x4A12, 0x12, False),
    (0x4A12, 0x13, True),
])
def test_skip_byte(harness, word, vx, taken):
    harness.state.registers[0xA] = vx
    harness.execute(word)
    assert harness.state.program_counter == (0x204 if taken else 0x202)

@pytest.mark.parametrize("word, v1, v2, taken", [
    (0x5120, 7, 7, True),
    (0x5120, 7, 8, False),
    (0x9120, 7, 7, False),
    (0x9120, 7, 8, True),
])
def test_skip_register(harness, word, v1, v2, taken):
    harness.state.registers[1] = v1
    harness.state.registers[2] = v2
    harness.execute(word)
    assert harness.state.program_counter == (0x204 if taken else 0x202)

def test_invalid_skip_register_pattern(harness):
    with pytest.raises(UnsupportedOpcode):
        harness.execute(0x5121)

def test_jp_v0(harness):
    harness.state.registers[0] = 0x10
    harness.state.registers[3] = 0x40
    harness.execute(0xB300)
    assert harness.state.program_counter == 0x310

def test_jp_vx_quirk(make_harness):
    h = make_harness(quirks=Quirks(jump_uses_vx=True))
    h.state.registers[0] = 0x10
    h.state.registers[3] = 0x40
    h.execute(0xB300)
    assert h.state.program_counter == 0x340

def test_jp_v0_out_of_bounds(harness):
    harness.state.registers[0] = 0xFF
    with pytest.raises(AddressOutOfBounds):
        harness.execute(0xBFF8)
