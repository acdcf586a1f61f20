from dataclasses import dataclass


@dataclass(frozen=True)
class Player:
    """Keyboard-controlled survivor.

    Attributes:
        tokens_to_win:
            Win threshold, copied from ``WorldConfig.tokens_to_win`` at creation.
        alive:
            Flips to False exactly once, when caught or on quit.
        move_count:
            Accepted moves so far; drives wave escalation.
        tokens_collected:
            Tokens picked up so far.
    """

    tokens_to_win: int
    alive: bool = True
    move_count: int = 0
    tokens_collected: int = 0

    @property
    def has_won(self) -> bool:
        return self.tokens_collected >= self.tokens_to_win
