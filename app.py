from dataclasses import dataclass, replace
from typing import Dict, List, Optional

import streamlit as st
from pyrsistent import thaw
from st_keyup import st_keyup  # type: ignore

from pursuit_grid.actions import Action
from pursuit_grid.config import DIFFICULTY_REGISTRY, Difficulty, config_for
from pursuit_grid.engine import PursuitEngine, new_game
from pursuit_grid.events import Caught, TokenCollected, WaveAdvanced
from pursuit_grid.moves import is_valid_move
from pursuit_grid.renderer.text import render_text
from pursuit_grid.renderer.texture import TEXTURE_MAP_REGISTRY, TextureRenderer
from pursuit_grid.types import Phase, SpeedRounding
from pursuit_grid.utils.logging import setup_logging

KEY_MAP: Dict[str, Action] = {
    "w": Action.UP,
    "s": Action.DOWN,
    "a": Action.LEFT,
    "d": Action.RIGHT,
}

setup_logging()

st.set_page_config(layout="wide", page_title="Pursuit Grid")
st.markdown(
    """
    <style>
        header, footer, #MainMenu { visibility: hidden; }
        .stMainBlockContainer {
            padding-top: 0;
            padding-bottom: 0;
        }
        .stToastContainer {
            align-items: center;
        }
    </style>
""",
    unsafe_allow_html=True,
)


@dataclass(frozen=True)
class GameSettings:
    difficulty: Difficulty
    width: int
    height: int
    obstacle_count: int
    token_count: int
    speed_rounding: SpeedRounding
    palette: str
    seed: int


def set_default_settings() -> None:
    if "game_settings" not in st.session_state:
        st.session_state["game_settings"] = GameSettings(
            difficulty=Difficulty.NORMAL,
            width=40,
            height=20,
            obstacle_count=25,
            token_count=15,
            speed_rounding=SpeedRounding.TRUNCATE,
            palette="classic",
            seed=0,
        )
        st.session_state["game_seed_counter"] = 0


def get_settings_from_widgets() -> GameSettings:
    settings: GameSettings = st.session_state["game_settings"]
    difficulties: List[Difficulty] = list(Difficulty)

    st.subheader("Difficulty")
    difficulty: Difficulty = st.selectbox(
        "Difficulty",
        difficulties,
        index=difficulties.index(settings.difficulty),
        format_func=lambda d: d.capitalize(),
        key="difficulty",
    )

    st.subheader("Playfield")
    width: int = st.slider("Width", 12, 80, settings.width, key="width")
    height: int = st.slider("Height", 12, 28, settings.height, key="height")
    obstacle_count: int = st.slider(
        "Obstacles", 0, 60, settings.obstacle_count, key="obstacle_count"
    )
    # A tier cannot ask for more tokens than the board holds.
    min_tokens = max(1, DIFFICULTY_REGISTRY[difficulty].tokens_to_win)
    token_count: int = st.slider(
        "Tokens",
        min_tokens,
        30,
        max(settings.token_count, min_tokens),
        key=f"token_count_{difficulty}",
    )

    st.subheader("Enemies")
    roundings: List[SpeedRounding] = list(SpeedRounding)
    speed_rounding: SpeedRounding = st.selectbox(
        "Speed rounding",
        roundings,
        index=roundings.index(settings.speed_rounding),
        format_func=lambda r: r.capitalize(),
        key="speed_rounding",
    )

    st.subheader("Rendering")
    palettes: List[str] = list(TEXTURE_MAP_REGISTRY.keys())
    palette: str = st.selectbox(
        "Palette",
        palettes,
        index=palettes.index(settings.palette),
        format_func=lambda p: p.replace("_", " ").capitalize(),
        key="palette",
    )

    st.subheader("Random seed")
    seed: int = st.number_input("Random seed", min_value=0, key="game_seed")

    return GameSettings(
        difficulty=difficulty,
        width=width,
        height=height,
        obstacle_count=obstacle_count,
        token_count=token_count,
        speed_rounding=speed_rounding,
        palette=palette,
        seed=seed,
    )


def make_engine(settings: GameSettings) -> PursuitEngine:
    config = config_for(
        settings.difficulty,
        width=settings.width,
        height=settings.height,
        obstacle_count=settings.obstacle_count,
        token_count=settings.token_count,
        speed_rounding=settings.speed_rounding,
    )
    engine = new_game(config, seed=settings.seed)
    st.session_state["engine"] = engine
    st.session_state["renderer"] = TextureRenderer(
        texture_map=TEXTURE_MAP_REGISTRY[settings.palette]
    )
    return engine


def get_keyboard_action() -> Optional[Action]:
    value: str = (
        st_keyup(
            "control",
            label_visibility="collapsed",
            key="game_key_input",
            placeholder="Type: WASD to move",
        )
        or ""
    )
    prev_value: str = st.session_state.get("game_key_input_prev", "")
    st.session_state["game_key_input_prev"] = value
    if value != prev_value:
        from collections import Counter

        new_values: List[str] = list((Counter(value) - Counter(prev_value)).elements())
        if not new_values:
            return None
        return KEY_MAP.get(new_values[-1].lower())
    return None


def do_action(engine: PursuitEngine, action: Action) -> None:
    # Blocked moves are dropped here; the engine only receives legal ones.
    if action != Action.QUIT and not is_valid_move(engine.state, action):
        return
    result = engine.tick(action)
    for event in result.events:
        if isinstance(event, TokenCollected):
            st.toast(f"Token collected ({event.tokens_collected})", icon="🪙")
        elif isinstance(event, WaveAdvanced):
            st.toast(
                f"Wave {event.wave}: {event.new_enemy_count} new enemies", icon="🌊"
            )
        elif isinstance(event, Caught):
            st.toast("Caught!", icon="💀")


# --------- Main App ---------
set_default_settings()
tab_game, tab_config, tab_state = st.tabs(["Game", "Config", "State"])

with tab_config:
    settings: GameSettings = get_settings_from_widgets()
    st.session_state["game_settings"] = settings

    if st.button("🔄 Start Game", key="save_config_btn", use_container_width=True):
        st.session_state["game_seed_counter"] = 0
        make_engine(st.session_state["game_settings"])
    st.divider()

with tab_game:
    if "engine" not in st.session_state:
        make_engine(st.session_state["game_settings"])

    left_col, middle_col, right_col = st.columns([0.25, 0.5, 0.25])

    with right_col:
        if st.button("🔄 New Game", key="generate_btn", use_container_width=True):
            st.session_state["game_seed_counter"] += 1
            make_engine(
                replace(
                    st.session_state["game_settings"],
                    seed=st.session_state["game_settings"].seed
                    + st.session_state["game_seed_counter"],
                )
            )

        # Need to put after new game
        engine: PursuitEngine = st.session_state["engine"]
        renderer: TextureRenderer = st.session_state["renderer"]

        st.info(f"{engine.state.config.width}x{engine.state.config.height}", icon="🗺️")
        st.divider()

        action: Optional[Action] = get_keyboard_action()
        if action is not None:
            do_action(engine, action)

        _, up_col, _ = st.columns([1, 1, 1])
        with up_col:
            if st.button("⬆️", key="up_btn", use_container_width=True):
                do_action(engine, Action.UP)
        left_btn, down_btn, right_btn = st.columns([1, 1, 1])
        with left_btn:
            if st.button("⬅️", key="left_btn", use_container_width=True):
                do_action(engine, Action.LEFT)
        with down_btn:
            if st.button("⬇️", key="down_btn", use_container_width=True):
                do_action(engine, Action.DOWN)
        with right_btn:
            if st.button("➡️", key="right_btn", use_container_width=True):
                do_action(engine, Action.RIGHT)

        if st.button("🏳️ Quit", key="quit_btn", use_container_width=True):
            do_action(engine, Action.QUIT)

    snapshot = engine.snapshot()

    with left_col:
        if snapshot.player is not None:
            st.info(
                f"**Tokens:** {snapshot.player.tokens_collected}"
                f" / {snapshot.player.tokens_to_win}",
                icon="🪙",
            )
            st.info(f"**Moves:** {snapshot.player.move_count}", icon="👣")
        st.info(f"**Wave:** {snapshot.wave}", icon="🌊")
        st.info(
            f"**Enemies:** {len(snapshot.enemies)}"
            f" ({sum(e.sees_player for e in snapshot.enemies)} alerted)",
            icon="👾",
        )

    with middle_col:
        if snapshot.phase == Phase.WON:
            st.success("🎉 **All tokens collected!** 🎉")
            st.balloons()
        if snapshot.phase == Phase.LOST:
            st.error(f"💀 **{snapshot.message or 'Game over'}** 💀")
        st.image(renderer.render(snapshot), use_container_width=True)

with tab_state:
    st.code(render_text(snapshot), language=None)
    st.json(thaw(engine.state.description), expanded=1)
