"""Terminal front end: keystroke reader, session loop and the ``tile2048`` command."""

import argparse
import json
import logging
import os
import sys
from typing import Iterable, Iterator, List, Optional, TextIO

from tile2048.config import load_settings
from tile2048.render import board_payload, render_text
from tile2048.tiles import RandomSource
from tile2048.turn import GameSession, TurnOutcome

logger = logging.getLogger(__name__)

PROMPT = "  Enter input: "
INVALID_MESSAGE = "  Invalid input: must be either w, a, s, d, or q"
QUIT_MESSAGE = "  Game Quit"
OVER_MESSAGE = "  Game Over"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_CLEAR_COMMAND = "cls" if os.name == "nt" else "clear"


def read_keys(stream: TextIO, prompt_stream: Optional[TextIO] = None) -> Iterator[str]:
    """Yield non-whitespace characters one at a time, prompting before each one is read."""
    while True:
        if prompt_stream is not None:
            prompt_stream.write(PROMPT)
            prompt_stream.flush()
        char = stream.read(1)
        while char and char.isspace():
            char = stream.read(1)
        if not char:
            return
        yield char


def clear_terminal() -> None:
    if os.system(_CLEAR_COMMAND) != 0:
        logger.warning("failed to clear the terminal with %r", _CLEAR_COMMAND)


def show(session: GameSession, out: TextIO, clear_screen: bool, as_json: bool,
         outcome: Optional[TurnOutcome] = None) -> None:
    if as_json:
        payload = board_payload(session.board, outcome.value if outcome else None)
        out.write(json.dumps(payload) + "\n")
    else:
        if clear_screen:
            out.flush()
            clear_terminal()
        out.write(render_text(session.board) + "\n")
    out.flush()


def quit_session(session: GameSession, out: TextIO, clear_screen: bool = True, as_json: bool = False,
                 messages: Optional[TextIO] = None) -> TurnOutcome:
    """Play ``q`` on an unfinished session and show the board the same way a typed ``q`` does."""
    if messages is None:
        messages = sys.stderr if as_json else out
    outcome = session.play("q")
    show(session, out, clear_screen, as_json, outcome)
    messages.write(QUIT_MESSAGE + "\n\n")
    messages.flush()
    return outcome


def run_session(session: GameSession, keys: Iterable[str], out: TextIO,
                clear_screen: bool = True, as_json: bool = False,
                messages: Optional[TextIO] = None) -> TurnOutcome:
    """Drive ``session`` with ``keys`` until it ends.

    Boards go to ``out``. Status lines go to ``messages``, which defaults to
    ``out`` for the text grid and to stderr in JSON mode so stdout stays one
    object per line.
    """
    if messages is None:
        messages = sys.stderr if as_json else out
    show(session, out, clear_screen, as_json)

    for key in keys:
        outcome = session.play(key)
        if outcome is TurnOutcome.INVALID:
            messages.write(INVALID_MESSAGE + "\n")
            continue
        show(session, out, clear_screen, as_json, outcome)
        if outcome is TurnOutcome.QUIT:
            messages.write(QUIT_MESSAGE + "\n\n")
            return outcome
        if outcome is TurnOutcome.GAME_OVER:
            messages.write(OVER_MESSAGE + "\n\n")
            return outcome

    logger.info("end of input, quitting")
    return quit_session(session, out, clear_screen, as_json, messages)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tile2048",
        description="Play 2048 in the terminal: w/a/s/d to move, q to quit",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for tile placement (default: $TILE2048_SEED)")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None,
                        help="Logging level for stderr (default: $TILE2048_LOG_LEVEL or WARNING)")
    parser.add_argument("--no-clear", dest="clear_screen", action="store_false", default=None,
                        help="Do not clear the screen between boards")
    parser.add_argument("--json", dest="as_json", action="store_true", default=None,
                        help="Print each board as a JSON line instead of the text grid")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(
            seed=args.seed,
            log_level=args.log_level,
            clear_screen=args.clear_screen,
            as_json=args.as_json,
        )
    except ValueError as exc:
        print(f"tile2048: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logger.debug("settings: %s", settings)

    session = GameSession.start(RandomSource(settings.seed))
    prompt_stream = None if settings.as_json else sys.stdout
    try:
        run_session(
            session,
            read_keys(sys.stdin, prompt_stream),
            sys.stdout,
            clear_screen=settings.clear_screen,
            as_json=settings.as_json,
        )
    except KeyboardInterrupt:
        if not settings.as_json:
            sys.stdout.write("\n")
        if not session.finished:
            quit_session(session, sys.stdout, settings.clear_screen, settings.as_json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
