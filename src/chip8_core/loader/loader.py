# chip8_core/loader/loader.py
"""
ROMローダーモジュール。
生バイナリ (.ch8) および Intel HEX 形式のROMイメージの読み込みをサポートします。
"""
import os
from typing import Dict, Union

RomImage = Union[bytes, Dict[int, int]]

class IntelHexLoader:
    """
    Intel HEX形式のファイルを解析し、アドレス→バイト値の辞書として返すローダー。
    """
    def load_intel_hex(self, file_path: str) -> Dict[int, int]:
        with open(file_path, 'r') as f:
            return self.parse_intel_hex(f.read().splitlines())

    def parse_intel_hex(self, lines) -> Dict[int, int]:
        image: Dict[int, int] = {}
        current_extended_address = 0x0000

        for line_num, line in enumerate(lines, 1):
            line = line.strip()
            if not line or not line.startswith(':'):
                continue

            comment_start = line.find(';')
            if comment_start != -1:
                line = line[:comment_start].strip()

            if len(line) < 11:
                raise ValueError(f"Invalid Intel HEX record format on line {line_num}: Too short - {line}")

            try:
                data_length = int(line[1:3], 16)
                address_field = int(line[3:7], 16)
                record_type = int(line[7:9], 16)
                data_part_str = line[9:-2]
                checksum_field = int(line[-2:], 16)
            except ValueError as e:
                raise ValueError(f"Error parsing Intel HEX line {line_num}: {line} - {e}") from e

            if len(data_part_str) != data_length * 2:
                raise ValueError(f"Data length mismatch on line {line_num}")

            data = bytes.fromhex(data_part_str)
            checksum_sum = data_length + (address_field >> 8) + (address_field & 0xFF) + record_type + sum(data)
            calculated_checksum = (~checksum_sum + 1) & 0xFF
            if calculated_checksum != checksum_field:
                raise ValueError(f"Checksum mismatch on line {line_num}: Calculated {calculated_checksum:02X}, Expected {checksum_field:02X}")

            if record_type == 0x00:
                load_address = current_extended_address + address_field
                for i, byte_data in enumerate(data):
                    image[load_address + i] = byte_data
            elif record_type == 0x01:
                break
            elif record_type == 0x02:
                current_extended_address = int(data_part_str, 16) << 4
            elif record_type == 0x04:
                current_extended_address = int(data_part_str, 16) << 16
            elif record_type in (0x03, 0x05):
                # 開始アドレスレコードはCHIP-8では意味を持たない
                pass
            else:
                raise ValueError(f"Unknown Intel HEX record type {record_type:02X} on line {line_num}")

        return image

# @intent:responsibility 拡張子に応じて適切な形式でROMイメージを読み込みます。
class RomLoader:
    """
    ROMファイルを読み込むローダー。
    .hex / .ihx はIntel HEX（疎な辞書）、それ以外は生バイナリ（bytes）として扱います。
    """
    HEX_SUFFIXES = ('.hex', '.ihx')

    def load_binary(self, file_path: str) -> bytes:
        with open(file_path, 'rb') as f:
            return f.read()

    def load_file(self, file_path: str) -> RomImage:
        _, ext = os.path.splitext(file_path)
        if ext.lower() in self.HEX_SUFFIXES:
            return IntelHexLoader().load_intel_hex(file_path)
        return self.load_binary(file_path)
