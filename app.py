# app.py — 8-Puzzle UI (image upload at top, manual/auto play in sidebar)
import json
import logging
import random
import time
from typing import List, Optional, Tuple

import streamlit as st
from PIL import Image, ImageDraw, ImageFont

from puzzle_board import (GOAL, Grid, PuzzleError, apply_move, is_solvable, move_tile,
                          random_board, shuffle_via_legal_moves)
from puzzle_config import (AUTOPLAY_SPEED_MAX_MS, AUTOPLAY_SPEED_MIN_MS, AUTOPLAY_SPEED_MS,
                           DEFAULT_SHUFFLE_STEPS, IMAGE_SIDE, MAX_EXPANSIONS, SHUFFLE_STEPS_MAX,
                           SHUFFLE_STEPS_MIN, SHUFFLE_STEPS_STEP, configure_logging)
from puzzle_solver import solve

configure_logging()
logger = logging.getLogger(__name__)


#  image helpers
def _measure_text(draw: ImageDraw.ImageDraw, text: str, font: ImageFont.ImageFont) -> Tuple[int, int]:
    l, t, r, b = draw.textbbox((0, 0), text, font=font)
    return r - l, b - t


def slice_image_to_tiles(img: Image.Image, side: int = IMAGE_SIDE) -> List[Image.Image]:
    """Square-crop, resize, split into 3×3 tiles."""
    img = img.convert("RGB")
    w, h = img.size
    s = min(w, h)
    img = img.crop(((w-s)//2, (h-s)//2, (w+s)//2, (h+s)//2)).resize((side, side))
    tiles: List[Image.Image] = []
    step = side // 3
    for r in range(3):
        for c in range(3):
            tiles.append(img.crop((c*step, r*step, (c+1)*step, (r+1)*step)))
    return tiles  # tile v sits at its GOAL index


def render_grid(state: Grid, tiles: Optional[List[Image.Image]], side: int = IMAGE_SIDE) -> Image.Image:
    """Draw the board for a given state."""
    canvas = Image.new("RGB", (side, side), (245, 245, 245))
    step = side // 3
    draw = ImageDraw.Draw(canvas)
    font = ImageFont.load_default()
    for i, val in enumerate(state):
        r, c = divmod(i, 3)
        x0, y0 = c*step, r*step
        if val == 0:
            continue
        if tiles:
            canvas.paste(tiles[GOAL.index(val)], (x0, y0))
        else:
            text = str(val)
            tw, th = _measure_text(draw, text, font)
            draw.text((x0 + (step - tw)//2, y0 + (step - th)//2),
                      text, fill=(30, 30, 30), font=font)
    for k in (step, 2*step):
        draw.line([(k, 0), (k, side)], width=3, fill=(30, 30, 30))
        draw.line([(0, k), (side, k)], width=3, fill=(30, 30, 30))
    return canvas


#  session helpers
def _reset_solution():
    ss.solution, ss.step = [], 0
    ss.stats = None
    ss.last_tick = 0.0


def _set_state(g: Grid):
    ss.state = g
    _reset_solution()


def _try_move(direction: str):
    try:
        _set_state(apply_move(ss.state, direction))
        ss.moves_made += 1
    except PuzzleError:
        logger.debug("Ignored illegal move %s from %s", direction, ss.state)


def _click_tile(index: int):
    nxt = move_tile(ss.state, index)
    if nxt is not None:
        _set_state(nxt)
        ss.moves_made += 1


#  Streamlit UI
st.set_page_config(page_title="8-Puzzle", layout="centered")
st.title("8-Puzzle")
st.caption("Upload an image → Shuffle → Solve (A*, Manhattan distance) → Step-by-step.")

# Session state
ss = st.session_state
if "state" not in ss: ss.state = GOAL
if "solution" not in ss: ss.solution = []         # List[Grid]
if "step" not in ss: ss.step = 0
if "stats" not in ss: ss.stats = None             # dict | None
if "tiles" not in ss: ss.tiles = None             # List[Image.Image] | None
if "moves_made" not in ss: ss.moves_made = 0
if "start_time" not in ss: ss.start_time = time.time()
if "last_tick" not in ss: ss.last_tick = 0.0

#  TOP: Image upload
st.subheader("1) Choose an image (optional)")
uploaded_main = st.file_uploader("Upload an image (JPG/PNG) for the puzzle tiles", type=["jpg", "jpeg", "png"])
if uploaded_main:
    try:
        ss.tiles = slice_image_to_tiles(Image.open(uploaded_main))
        st.success("Image sliced into 9 tiles.")
    except OSError as e:
        ss.tiles = None
        st.error(f"Couldn’t process image: {e}")

st.divider()

#  SIDEBAR: controls
st.sidebar.header("Controls")

shuffle_mode = st.sidebar.radio("Shuffle mode", ["Legal moves", "Fully random"], index=0,
                                help="Fully random boards are unsolvable half of the time.")
shuffle_steps = st.sidebar.slider("Shuffle moves", SHUFFLE_STEPS_MIN, SHUFFLE_STEPS_MAX,
                                  DEFAULT_SHUFFLE_STEPS, SHUFFLE_STEPS_STEP,
                                  disabled=shuffle_mode != "Legal moves")

st.sidebar.subheader("Manual moves")
if st.sidebar.button("⬆️ Up"):    _try_move("up")
if st.sidebar.button("⬅️ Left"):  _try_move("left")
if st.sidebar.button("➡️ Right"): _try_move("right")
if st.sidebar.button("⬇️ Down"):  _try_move("down")

st.sidebar.subheader("Autoplay solution")
auto_play = st.sidebar.checkbox("Enable autoplay", value=False, key="autoplay")
auto_speed_ms = st.sidebar.slider("Speed (ms/step)", AUTOPLAY_SPEED_MIN_MS, AUTOPLAY_SPEED_MAX_MS,
                                  AUTOPLAY_SPEED_MS, 50)

#  MAIN: top buttons
col1, col2, col3 = st.columns(3)

if col1.button("Shuffle"):
    if shuffle_mode == "Legal moves":
        _set_state(shuffle_via_legal_moves(shuffle_steps, random.Random()))
    else:
        _set_state(random_board(random.Random()))
    ss.moves_made = 0
    ss.start_time = time.time()

if col2.button("Solve"):
    try:
        result = solve(ss.state, GOAL, max_expansions=MAX_EXPANSIONS)
    except PuzzleError as e:
        _reset_solution()
        st.error(f"Solver error: {e}")
    else:
        ss.solution = list(result.path or [])
        ss.step = 0
        ss.stats = {
            "nodes_explored": result.nodes_explored,
            "time_ms": result.elapsed_time * 1000.0,
            "path_length": result.move_count,
            "truncated": result.truncated,
        }
        ss.moves_made = 0
        ss.start_time = time.time()
        ss.last_tick = 0.0

if col3.button("Reset"):
    _set_state(GOAL)
    ss.moves_made = 0
    ss.start_time = time.time()

#  Playback + stats
sol = ss.solution
elapsed = time.time() - ss.get("start_time", time.time())
st.caption(f"Manual moves: {ss.moves_made}  •  Elapsed: {elapsed:0.1f}s")

if ss.stats:
    m1, m2, m3 = st.columns(3)
    m1.metric("Nodes explored", ss.stats["nodes_explored"])
    m2.metric("Time", f"{ss.stats['time_ms']:.2f} ms")
    m3.metric("Path length", ss.stats["path_length"] if ss.stats["path_length"] is not None else "N/A")
    if ss.stats["path_length"] is None:
        if ss.stats["truncated"]:
            st.warning("Search stopped at the step budget before reaching the goal.")
        else:
            st.warning("No solution: this board cannot reach the goal.")
elif not is_solvable(ss.state):
    st.info("This board has the wrong parity and cannot be solved.")

# Clamp indices and compute last_idx
if sol and len(sol) > 1:
    last_idx = len(sol) - 1
    ss.step = min(max(ss.step, 0), last_idx)

    st.write(f"Solution length: **{last_idx}** moves")
    c1, c2, c3 = st.columns(3)
    if c1.button("⬅️ Prev", disabled=ss.step <= 0):
        ss.step = max(0, ss.step - 1)
        ss.last_tick = 0.0
        st.rerun()
    if c2.button("➡️ Next", disabled=ss.step >= last_idx):
        ss.step = min(last_idx, ss.step + 1)
        ss.last_tick = 0.0
        st.rerun()
    if c3.button("⏩ End", disabled=ss.step >= last_idx):
        ss.step = last_idx
        ss.last_tick = 0.0
        st.rerun()

    display_state = sol[ss.step]
    caption = f"Step {ss.step}/{last_idx}"
else:
    last_idx = 0
    display_state = ss.state
    caption = "Current puzzle"

#  Show current frame (image)
st.image(render_grid(display_state, ss.tiles), caption=caption, use_container_width=True)

#  Click-to-move grid (only while not replaying a solution)
if not (sol and len(sol) > 1):
    st.caption("Click a tile next to the blank to slide it.")
    for r in range(3):
        cols = st.columns(3)
        for c in range(3):
            i = r*3 + c
            val = ss.state[i]
            cols[c].button(" " if val == 0 else str(val), key=f"tile_{i}",
                           on_click=_click_tile, args=(i,), disabled=val == 0,
                           use_container_width=True)

#  Autoplay tick (render, then schedule next step)
if sol and len(sol) > 1 and auto_play and ss.step < last_idx:
    now_ms = time.time() * 1000.0
    if ss.last_tick == 0.0:
        ss.last_tick = now_ms
    due_ms = ss.last_tick + auto_speed_ms
    remaining_ms = max(0.0, due_ms - now_ms)

    if remaining_ms > 0:
        time.sleep(remaining_ms / 1000.0)

    ss.step = min(last_idx, ss.step + 1)
    ss.last_tick = time.time() * 1000.0
    st.rerun()

#  Download solution as JSON
if sol and len(sol) > 1:
    data = {"path": [list(s) for s in sol], "stats": ss.stats}
    st.download_button("Download solution (JSON)",
                       data=json.dumps(data, indent=2),
                       file_name="solution.json",
                       mime="application/json")
