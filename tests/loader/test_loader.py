# tests/loader/test_loader.py
"""
chip8_core.loader.loaderモジュールの単体テスト。
"""
import pytest

from chip8_core.loader.loader import IntelHexLoader, RomLoader

def _record(address: int, record_type: int, data: bytes) -> str:
    body = bytes([len(data), address >> 8, address & 0xFF, record_type]) + data
    checksum = (-sum(body)) & 0xFF
    return ":" + body.hex().upper() + f"{checksum:02X}"

class TestIntelHexLoader:
    def test_parse_data_records(self):
        lines = [
            _record(0x0200, 0x00, bytes([0x00, 0xE0, 0xA2, 0x2A])),
            _record(0x0204, 0x00, bytes([0x12, 0x00])),
            ":00000001FF",
        ]
        image = IntelHexLoader().parse_intel_hex(lines)
        assert image == {0x200: 0x00, 0x201: 0xE0, 0x202: 0xA2, 0x203: 0x2A, 0x204: 0x12, 0x205: 0x00}

    def test_stops_at_eof_record(self):
        lines = [":00000001FF", _record(0x0000, 0x00, b"\x01")]
        assert IntelHexLoader().parse_intel_hex(lines) == {}

    def test_extended_segment_address(self):
        lines = [_record(0x0000, 0x02, b"\x00\x10"), _record(0x0002, 0x00, b"\xAB")]
        assert IntelHexLoader().parse_intel_hex(lines) == {0x102: 0xAB}

    def test_checksum_mismatch(self):
        line = _record(0x0200, 0x00, b"\x12")
        bad = line[:-2] + "00"
        with pytest.raises(ValueError, match="Checksum mismatch"):
            IntelHexLoader().parse_intel_hex([bad])

    def test_too_short(self):
        with pytest.raises(ValueError, match="Too short"):
            IntelHexLoader().parse_intel_hex([":0000"])

    def test_unknown_record_type(self):
        with pytest.raises(ValueError, match="Unknown Intel HEX record type"):
            IntelHexLoader().parse_intel_hex([_record(0x0000, 0x09, b"")])

    def test_comments_and_blank_lines_ignored(self):
        lines = ["", "; header", _record(0x0200, 0x00, b"\x42") + " ; data"]
        assert IntelHexLoader().parse_intel_hex(lines) == {0x200: 0x42}

class TestRomLoader:
    def test_load_binary(self, tmp_path):
        rom = tmp_path / "test.ch8"
        rom.write_bytes(b"\x00\xE0\x12\x00")
        assert RomLoader().load_file(str(rom)) == b"\x00\xE0\x12\x00"

    def test_load_hex_by_suffix(self, tmp_path):
        rom = tmp_path / "test.HEX"
        rom.write_text(_record(0x0200, 0x00, b"\x00\xE0") + "\n:00000001FF\n")
        assert RomLoader().load_file(str(rom)) == {0x200: 0x00, 0x201: 0xE0}
