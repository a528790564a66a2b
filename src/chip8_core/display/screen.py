# chip8_core/display/screen.py
"""
画面バッファモジュール。

CHIP-8のモノクロ画面（既定 64x32）をピクセル単位のバイト列として保持します。
描画はXORで行われ、既に点灯していたピクセルを消した場合は衝突として報告します。
ホストウィンドウへの描画はこのモジュールの責務ではありません。
"""
from typing import Iterable

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

# @intent:responsibility 画面のピクセル状態を保持し、スプライト描画とクリアを提供します。
class Screen:
    """
    CHIP-8の画面バッファ。各ピクセルは0(消灯)または1(点灯)です。
    """
    # @intent:pre-condition width, heightは正の整数である必要があります。
    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError("Screen dimensions must be positive.")
        self.width = width
        self.height = height
        self._pixels = bytearray(width * height)

    def clear(self) -> None:
        self._pixels = bytearray(self.width * self.height)

    def get_pixel(self, x: int, y: int) -> int:
        self._check_coords(x, y)
        return self._pixels[y * self.width + x]

    def set_pixel(self, x: int, y: int, value: int) -> None:
        self._check_coords(x, y)
        self._pixels[y * self.width + x] = 1 if value else 0

    # @intent:responsibility スプライトをXORで描画し、衝突の有無を返します。
    # @intent:rationale 開始座標は常に画面サイズで折り返します。はみ出したピクセルはclipがTrueなら切り捨て、Falseなら反対側に折り返します。
    def draw_sprite(self, x: int, y: int, sprite_rows: Iterable[int], clip: bool = True) -> bool:
        """
        (x, y) を左上として、1行8ピクセルのスプライトを描画します。
        いずれかの点灯ピクセルが消灯された場合にTrueを返します。
        """
        x0 = x % self.width
        y0 = y % self.height
        collision = False

        for row, bits in enumerate(sprite_rows):
            py = y0 + row
            if py >= self.height:
                if clip:
                    break
                py %= self.height
            for col in range(8):
                if not bits & (0x80 >> col):
                    continue
                px = x0 + col
                if px >= self.width:
                    if clip:
                        break
                    px %= self.width
                offset = py * self.width + px
                if self._pixels[offset]:
                    collision = True
                self._pixels[offset] ^= 1

        return collision

    # @intent:responsibility デバッグ用に画面内容をテキストで返します。
    def to_text(self, on: str = "#", off: str = ".") -> str:
        lines = []
        for y in range(self.height):
            row = self._pixels[y * self.width:(y + 1) * self.width]
            lines.append("".join(on if p else off for p in row))
        return "\n".join(lines)

    def lit_pixel_count(self) -> int:
        return sum(self._pixels)

    def _check_coords(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) out of bounds for {self.width}x{self.height} screen.")
