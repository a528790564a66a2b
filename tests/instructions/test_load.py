# tests/instructions/test_load.py
"""
ロード/ストア命令の検証。
"""
import pytest

from chip8_core.common.errors import AddressOutOfBounds
from chip8_core.instructions import Quirks
from chip8_core.transport.memory import FONT_START

def test_ld_byte(harness):
    harness.execute(0x6A42)
    assert harness.state.registers[0xA] == 0x42

def test_ld_i(harness):
    harness.execute(0xA2F0)
    assert harness.state.index_register == 0x2F0

def test_timers_round_trip(harness):
    harness.state.registers[5] = 0x3C
    harness.execute(0xF515)
    harness.execute(0xF518)
    assert harness.state.delay_timer == 0x3C
    assert harness.state.sound_timer == 0x3C

    harness.state.delay_timer = 0x11
    harness.execute(0xF607)
    assert harness.state.registers[6] == 0x11

def test_add_i_vx_wraps_16_bits(harness):
    harness.state.index_register = 0xFFFF
    harness.state.registers[1] = 2
    harness.execute(0xF11E)
    assert harness.state.index_register == 0x0001

def test_ld_f_points_at_font_glyph(harness):
    harness.state.registers[2] = 0x1A  # 下位ニブルのみ使用
    harness.execute(0xF229)
    assert harness.state.index_register == FONT_START + 0xA * 5

def test_ld_f_uses_context_font_address(harness):
    harness.ctx.font_address = 0x000
    harness.state.registers[2] = 3
    harness.execute(0xF229)
    assert harness.state.index_register == 15

def test_bcd(harness):
    harness.state.registers[7] = 254
    harness.state.index_register = 0x300
    harness.execute(0xF733)
    assert list(harness.memory[0x300:0x303]) == [2, 5, 4]

# @intent:test_case_bounds 範囲外への書き込みは一切行われないことを検証します。
def test_bcd_out_of_bounds_writes_nothing(harness):
    harness.state.registers[7] = 123
    harness.state.index_register = 0xFFE
    with pytest.raises(AddressOutOfBounds) as excinfo:
        harness.execute(0xF733)
    assert excinfo.value.address == 0x1000
    assert harness.memory[0xFFE] == 0
    assert harness.memory[0xFFF] == 0

def test_store_and_load_registers(harness):
    for i in range(4):
        harness.state.registers[i] = 0x10 + i
    harness.state.index_register = 0x300
    harness.execute(0xF355)
    assert list(harness.memory[0x300:0x305]) == [0x10, 0x11, 0x12, 0x13, 0x00]
    assert harness.state.index_register == 0x304

    harness.state.registers[:] = bytearray(16)
    harness.state.index_register = 0x300
    harness.execute(0xF365)
    assert list(harness.state.registers[:4]) == [0x10, 0x11, 0x12, 0x13]
    assert harness.state.index_register == 0x304

def test_store_without_increment_quirk(make_harness):
    h = make_harness(quirks=Quirks(load_store_increments_i=False))
    h.state.index_register = 0x300
    h.execute(0xF255)
    assert h.state.index_register == 0x300

def test_store_all_registers_at_memory_end(harness):
    harness.state.index_register = 0x1000 - 16
    harness.state.registers[0xF] = 0xEE
    harness.execute(0xFF55)
    assert harness.memory[0xFFF] == 0xEE

def test_load_registers_out_of_bounds(harness):
    harness.state.index_register = 0xFFD
    harness.state.registers[0] = 0x77
    with pytest.raises(AddressOutOfBounds):
        harness.execute(0xF465)
    assert harness.state.registers[0] == 0x77
    assert harness.state.index_register == 0xFFD
