# chip8_core/transport/memory.py
"""
Transport Layer (アドレス空間)

CHIP-8のアドレス空間はbytearrayとして表現され、fetch/step/executeに直接渡されます。
このモジュールはアドレス空間の生成、フォントとプログラムの配置、範囲チェックの責務を負います。
"""
from typing import Iterable, Mapping, Union

from chip8_core.common.errors import AddressOutOfBounds

MEMORY_SIZE = 0x1000      # 4KB
PROGRAM_START = 0x200     # 多くのROMが想定するロードアドレス
FONT_START = 0x050
FONT_CHAR_SIZE = 5        # 1文字あたりのバイト数 (8x5ピクセル)

# @intent:constant 16進数字 0-F の組み込みフォント。
FONT_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

# @intent:responsibility 指定されたサイズのゼロ初期化済みアドレス空間を生成します。
# @intent:pre-condition sizeは正の整数である必要があります。
def create_memory(size: int = MEMORY_SIZE) -> bytearray:
    if not isinstance(size, int) or size <= 0:
        raise ValueError("Memory size must be a positive integer.")
    return bytearray(size)

# @intent:responsibility [address, address + length) がメモリ内に収まることを検証します。
# @intent:post-condition 収まらない場合、最初にはみ出すアドレスを持つAddressOutOfBoundsを送出します。
def check_range(memory: bytearray, address: int, length: int = 1) -> None:
    if address < 0:
        raise AddressOutOfBounds(address=address, limit=len(memory))
    if address + length > len(memory):
        raise AddressOutOfBounds(address=max(address, len(memory)), limit=len(memory))

# @intent:responsibility 組み込みフォントを指定アドレスに書き込みます。
def load_font(memory: bytearray, address: int = FONT_START) -> None:
    check_range(memory, address, len(FONT_SET))
    memory[address:address + len(FONT_SET)] = FONT_SET

# @intent:responsibility プログラムイメージをアドレス空間に配置します。
# @intent:pre-condition イメージ全体がメモリに収まること。収まらない場合はメモリを変更せずに例外を送出します。
def load_program(memory: bytearray, data: Union[bytes, bytearray, Iterable[int]], address: int = PROGRAM_START) -> int:
    """
    プログラムイメージをaddressから書き込み、書き込んだバイト数を返します。
    """
    image = bytes(data)
    check_range(memory, address, len(image))
    memory[address:address + len(image)] = image
    return len(image)

# @intent:responsibility アドレス→バイト値の疎なイメージ（Intel HEXなど）をアドレス空間に配置します。
def load_sparse_image(memory: bytearray, image: Mapping[int, int]) -> int:
    for address in image:
        check_range(memory, address)
    for address, value in image.items():
        memory[address] = value & 0xFF
    return len(image)
