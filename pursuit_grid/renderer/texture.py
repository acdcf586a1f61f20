"""Pillow renderer.

Paints each cell as a flat tile, with tokens, enemies and the player drawn as
discs on top. Colours come from a :data:`TextureMap` keyed by
:class:`TileKind`, so hosts can swap palettes without touching layout code.
``resolution`` is the image width in pixels; the height follows the grid's
aspect ratio.
"""

from enum import StrEnum, auto
from typing import Dict, Optional, Tuple

from PIL import Image, ImageDraw

from pursuit_grid.snapshot import Snapshot

DEFAULT_RESOLUTION = 640

Color = Tuple[int, int, int, int]


class TileKind(StrEnum):
    FLOOR = auto()
    BORDER = auto()
    OBSTACLE = auto()
    TOKEN = auto()
    ENEMY = auto()
    ALERT_ENEMY = auto()
    PLAYER = auto()
    DEAD_PLAYER = auto()


TextureMap = Dict[TileKind, Color]

CLASSIC_TEXTURE_MAP: TextureMap = {
    TileKind.FLOOR: (24, 24, 28, 255),
    TileKind.BORDER: (96, 96, 104, 255),
    TileKind.OBSTACLE: (150, 110, 70, 255),
    TileKind.TOKEN: (240, 200, 40, 255),
    TileKind.ENEMY: (200, 60, 60, 255),
    TileKind.ALERT_ENEMY: (255, 120, 0, 255),
    TileKind.PLAYER: (70, 160, 255, 255),
    TileKind.DEAD_PLAYER: (120, 120, 120, 255),
}

HIGH_CONTRAST_TEXTURE_MAP: TextureMap = {
    TileKind.FLOOR: (0, 0, 0, 255),
    TileKind.BORDER: (255, 255, 255, 255),
    TileKind.OBSTACLE: (255, 255, 255, 255),
    TileKind.TOKEN: (255, 255, 0, 255),
    TileKind.ENEMY: (255, 0, 0, 255),
    TileKind.ALERT_ENEMY: (255, 0, 255, 255),
    TileKind.PLAYER: (0, 255, 0, 255),
    TileKind.DEAD_PLAYER: (0, 96, 0, 255),
}

DEFAULT_TEXTURE_MAP: TextureMap = CLASSIC_TEXTURE_MAP

TEXTURE_MAP_REGISTRY: Dict[str, TextureMap] = {
    "classic": CLASSIC_TEXTURE_MAP,
    "high_contrast": HIGH_CONTRAST_TEXTURE_MAP,
}


class TextureRenderer:
    def __init__(
        self,
        resolution: int = DEFAULT_RESOLUTION,
        texture_map: Optional[TextureMap] = None,
    ):
        self.resolution = resolution
        self.texture_map = texture_map or DEFAULT_TEXTURE_MAP

    def image_size(self, width: int, height: int) -> Tuple[int, int]:
        """Pixel size of a frame for a ``width`` x ``height`` grid."""
        cell = self.cell_size(width)
        return cell * width, cell * height

    def cell_size(self, width: int) -> int:
        return max(1, self.resolution // width)

    def render(self, snapshot: Snapshot) -> Image.Image:
        width, height = snapshot.width, snapshot.height
        cell = self.cell_size(width)
        image = Image.new(
            "RGBA", self.image_size(width, height), self.texture_map[TileKind.FLOOR]
        )
        draw = ImageDraw.Draw(image)

        def tile(x: int, y: int, kind: TileKind) -> None:
            draw.rectangle(
                (x * cell, y * cell, (x + 1) * cell - 1, (y + 1) * cell - 1),
                fill=self.texture_map[kind],
            )

        def disc(x: int, y: int, kind: TileKind, inset: float = 0.15) -> None:
            pad = int(cell * inset)
            draw.ellipse(
                (
                    x * cell + pad,
                    y * cell + pad,
                    (x + 1) * cell - 1 - pad,
                    (y + 1) * cell - 1 - pad,
                ),
                fill=self.texture_map[kind],
            )

        for x in range(width):
            tile(x, 0, TileKind.BORDER)
            tile(x, height - 1, TileKind.BORDER)
        for y in range(height):
            tile(0, y, TileKind.BORDER)
            tile(width - 1, y, TileKind.BORDER)

        for pos in snapshot.obstacles:
            tile(pos.x, pos.y, TileKind.OBSTACLE)
        for token in snapshot.tokens:
            if not token.collected:
                disc(token.position.x, token.position.y, TileKind.TOKEN, inset=0.3)
        for enemy in snapshot.enemies:
            kind = TileKind.ALERT_ENEMY if enemy.sees_player else TileKind.ENEMY
            disc(enemy.position.x, enemy.position.y, kind)
        if snapshot.player is not None:
            kind = TileKind.PLAYER if snapshot.player.alive else TileKind.DEAD_PLAYER
            disc(snapshot.player.position.x, snapshot.player.position.y, kind, inset=0.1)

        return image
