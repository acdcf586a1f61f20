"""ASCII renderer.

Layers, bottom to top: border frame, obstacles, uncollected tokens, enemies
(``!`` when alerted), the player. The player is hidden once dead.
"""

from typing import List

from pursuit_grid.snapshot import Snapshot

BORDER_GLYPH = "#"
EMPTY_GLYPH = " "
OBSTACLE_GLYPH = "█"
TOKEN_GLYPH = "$"
ENEMY_GLYPH = "*"
ALERT_ENEMY_GLYPH = "!"
PLAYER_GLYPH = "@"


def render_grid(snapshot: Snapshot) -> List[str]:
    """Return the playfield as one string per row."""
    width, height = snapshot.width, snapshot.height
    rows = [
        [
            BORDER_GLYPH
            if x in (0, width - 1) or y in (0, height - 1)
            else EMPTY_GLYPH
            for x in range(width)
        ]
        for y in range(height)
    ]

    def put(x: int, y: int, glyph: str) -> None:
        if 0 <= x < width and 0 <= y < height:
            rows[y][x] = glyph

    for pos in snapshot.obstacles:
        put(pos.x, pos.y, OBSTACLE_GLYPH)
    for token in snapshot.tokens:
        if not token.collected:
            put(token.position.x, token.position.y, TOKEN_GLYPH)
    for enemy in snapshot.enemies:
        put(
            enemy.position.x,
            enemy.position.y,
            ALERT_ENEMY_GLYPH if enemy.sees_player else ENEMY_GLYPH,
        )
    if snapshot.player is not None and snapshot.player.alive:
        put(snapshot.player.position.x, snapshot.player.position.y, PLAYER_GLYPH)

    return ["".join(row) for row in rows]


def render_hud(snapshot: Snapshot) -> List[str]:
    """Status and help lines shown under the playfield."""
    tokens = (
        f"{snapshot.player.tokens_collected}/{snapshot.player.tokens_to_win}"
        if snapshot.player is not None
        else "-"
    )
    goal = snapshot.player.tokens_to_win if snapshot.player is not None else 0
    return [
        f"Tokens: {tokens} | Wave: {snapshot.wave} | Enemies: {len(snapshot.enemies)}",
        f"WASD/Arrows: Move | Collect {goal} tokens to WIN! | ESC: Quit",
    ]


def render_text(snapshot: Snapshot, hud: bool = True) -> str:
    """Full frame as a single newline-joined string."""
    lines = render_grid(snapshot)
    if hud:
        lines += render_hud(snapshot)
    return "\n".join(lines)
