# chip8_core/core/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のニーモニックに変換します。
デコード処理は純粋関数であるため、Instruction Layerのデコードロジックをそのまま再利用します。
"""
from typing import List

from chip8_core.common.types import DisassemblyLine
from chip8_core.instructions import decode_opcode

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(memory: bytearray, start_addr: int, length: int) -> List[DisassemblyLine]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = min(start_addr + length, len(memory))

    while current_addr < end_addr:
        # 範囲の末尾に1バイトだけが残った場合はデータとして表示する
        if current_addr + 1 >= end_addr:
            result.append((current_addr, f"{memory[current_addr]:02X}", f"DB ${memory[current_addr]:02X}"))
            break

        opcode = (memory[current_addr] << 8) | memory[current_addr + 1]
        operation = decode_opcode(opcode)
        hex_bytes = f"{memory[current_addr]:02X} {memory[current_addr + 1]:02X}"
        result.append((current_addr, hex_bytes, operation.to_assembly()))
        current_addr += 2

    return result
