# tests/core/test_state.py
"""
chip8_core.core.stateモジュールの単体テスト。
"""
import pytest

from chip8_core.common.errors import AddressOutOfBounds, InvalidOperand, StackOverflow, StackUnderflow
from chip8_core.core.state import Chip8CpuState, NUM_REGISTERS, STACK_SIZE

# @intent:test_suite CPU状態のスタック規律、フェッチ、リセット、タイマー、キーパッドを検証します。

class TestInitialState:
    def test_fresh_state_is_zeroed(self):
        state = Chip8CpuState()
        assert state.registers == bytearray(NUM_REGISTERS)
        assert state.index_register == 0
        assert state.program_counter == 0
        assert state.stack_pointer == 0
        assert state.delay_timer == 0
        assert state.sound_timer == 0
        assert state.call_stack == [0] * STACK_SIZE
        assert state.keypad == [False] * 16

    # @intent:test_case_independence インスタンスごとに独立した配列を持つことを検証します。
    def test_instances_do_not_share_arrays(self):
        a = Chip8CpuState()
        b = Chip8CpuState()
        a.registers[0] = 0x12
        a.call_stack[1] = 0x300
        a.keypad[3] = True
        assert b.registers[0] == 0
        assert b.call_stack[1] == 0
        assert b.keypad[3] is False

class TestStack:
    def test_push_writes_at_new_top(self):
        state = Chip8CpuState()
        assert state.call_stack[state.stack_pointer] == 0

        state.push(1)
        assert state.call_stack[state.stack_pointer] == 1
        assert state.stack_pointer == 1

        state.push(5)
        assert state.call_stack[state.stack_pointer] == 5
        assert state.stack_pointer == 2

    # @intent:test_case_scenario push(0x200) -> pop() で値が戻り、SPが0に戻ることを検証します。
    def test_push_then_pop_round_trip(self):
        state = Chip8CpuState()
        state.push(0x200)
        assert state.pop() == 0x200
        assert state.stack_pointer == 0

    def test_pop_returns_values_in_reverse_order(self):
        state = Chip8CpuState()
        state.push(1)
        state.push(2)
        state.push(3)

        assert state.pop() == 3
        assert state.stack_pointer == 2
        assert state.pop() == 2
        assert state.stack_pointer == 1
        assert state.pop() == 1
        assert state.stack_pointer == 0

    # @intent:test_case_capacity スロット0は予約されているため、15回までプッシュできることを検証します。
    def test_fifteen_pushes_are_lifo(self):
        state = Chip8CpuState()
        values = [0x200 + i * 2 for i in range(STACK_SIZE - 1)]
        for v in values:
            state.push(v)
        assert state.stack_pointer == STACK_SIZE - 1
        assert [state.pop() for _ in values] == list(reversed(values))
        assert state.stack_pointer == 0

    def test_sixteenth_push_overflows(self):
        state = Chip8CpuState()
        for v in range(STACK_SIZE - 1):
            state.push(v)
        with pytest.raises(StackOverflow):
            state.push(0xFFF)

    # @intent:test_case_scenario SP=15でのプッシュがStackOverflowとなり、状態を変更しないことを検証します。
    def test_overflow_leaves_state_unchanged(self):
        state = Chip8CpuState()
        state.stack_pointer = 15
        stack_before = list(state.call_stack)

        with pytest.raises(StackOverflow) as excinfo:
            state.push(1)

        assert excinfo.value.stack_length == STACK_SIZE
        assert state.stack_pointer == 15
        assert state.call_stack == stack_before

    def test_underflow_on_empty_stack(self):
        state = Chip8CpuState()
        state.call_stack[0] = 0xABC
        with pytest.raises(StackUnderflow):
            state.pop()
        assert state.stack_pointer == 0
        assert state.call_stack[0] == 0xABC

    def test_underflow_after_draining(self):
        state = Chip8CpuState()
        state.push(7)
        state.pop()
        with pytest.raises(StackUnderflow):
            state.pop()

    def test_push_masks_to_16_bits(self):
        state = Chip8CpuState()
        state.push(0x12345)
        assert state.pop() == 0x2345

class TestFetch:
    def test_fetch_is_big_endian(self):
        state = Chip8CpuState()
        memory = bytearray([0x12, 0x34, 0x00, 0x00])
        assert state.fetch(memory) == 0x1234
        assert state.program_counter == 2

    # @intent:test_case_scenario メモリ [0xA2, 0xF0] から 0xA2F0 がフェッチされることを検証します。
    def test_fetch_scenario(self):
        state = Chip8CpuState()
        memory = bytearray([0xA2, 0xF0])
        assert state.fetch(memory) == 0xA2F0
        assert state.program_counter == 2

    def test_fetch_at_non_zero_pc(self):
        state = Chip8CpuState(program_counter=0x200)
        memory = bytearray(0x1000)
        memory[0x200:0x204] = bytes([0x00, 0xE0, 0x12, 0x00])
        assert state.fetch(memory) == 0x00E0
        assert state.fetch(memory) == 0x1200
        assert state.program_counter == 0x204

    # @intent:test_case_scenario 残り1バイトでのフェッチがAddressOutOfBoundsとなり、PCを変更しないことを検証します。
    def test_fetch_with_one_byte_remaining_fails(self):
        memory = bytearray(16)
        state = Chip8CpuState(program_counter=len(memory) - 1)

        with pytest.raises(AddressOutOfBounds) as excinfo:
            state.fetch(memory)

        assert excinfo.value.address == len(memory)
        assert excinfo.value.limit == len(memory)
        assert state.program_counter == len(memory) - 1

    def test_fetch_past_end_fails(self):
        memory = bytearray(16)
        state = Chip8CpuState(program_counter=40)
        with pytest.raises(AddressOutOfBounds) as excinfo:
            state.fetch(memory)
        assert excinfo.value.address == 41
        assert state.program_counter == 40

    def test_fetch_last_complete_word(self):
        memory = bytearray(16)
        memory[14], memory[15] = 0xBE, 0xEF
        state = Chip8CpuState(program_counter=14)
        assert state.fetch(memory) == 0xBEEF
        assert state.program_counter == 16

    def test_address_out_of_bounds_is_index_error(self):
        state = Chip8CpuState()
        with pytest.raises(IndexError):
            state.fetch(bytearray(1))

class TestReset:
    # @intent:test_case_reset 任意の操作の後でも、リセット後は新規生成した状態と等しくなることを検証します。
    def test_reset_matches_fresh_state(self):
        state = Chip8CpuState()
        state.push(0x202)
        state.push(0x304)
        state.pop()
        state.registers[0x3] = 0x42
        state.registers[0xF] = 1
        state.index_register = 0x123
        state.program_counter = 0x456
        state.delay_timer = 10
        state.sound_timer = 20
        state.set_key(0xA, True)

        state.reset()

        assert state == Chip8CpuState()
        assert state.call_stack == [0] * STACK_SIZE

    def test_reset_keeps_fixed_sizes(self):
        state = Chip8CpuState()
        state.reset()
        assert len(state.registers) == NUM_REGISTERS
        assert len(state.call_stack) == STACK_SIZE
        assert len(state.keypad) == 16

class TestTimersAndKeypad:
    def test_tick_decrements_both_timers(self):
        state = Chip8CpuState(delay_timer=2, sound_timer=1)
        state.tick_timers()
        assert state.delay_timer == 1
        assert state.sound_timer == 0
        state.tick_timers()
        assert state.delay_timer == 0
        assert state.sound_timer == 0

    def test_set_and_query_keys(self):
        state = Chip8CpuState()
        assert state.first_pressed_key() is None
        state.set_key(0x7, True)
        state.set_key(0x2, True)
        assert state.is_key_pressed(0x7)
        assert state.first_pressed_key() == 0x2
        state.set_key(0x2, False)
        assert state.first_pressed_key() == 0x7

    @pytest.mark.parametrize("key", [-1, 16, 0xFF])
    def test_invalid_key_index(self, key):
        state = Chip8CpuState()
        with pytest.raises(InvalidOperand):
            state.set_key(key, True)
        with pytest.raises(InvalidOperand):
            state.is_key_pressed(key)

    def test_copy_is_independent(self):
        state = Chip8CpuState()
        state.push(0x222)
        clone = state.copy()
        clone.pop()
        clone.registers[0] = 9
        assert state.stack_pointer == 1
        assert state.registers[0] == 0
