#!/usr/bin/env python3
"""Play a Seven Wonders game hot-seat in the console."""

import argparse
import logging
import sys
from typing import Iterable, List, Optional, Tuple

from sevenwonders.core import (
    GameState,
    TurnPhase,
    VariantConfig,
    cancel_selection,
    describe_outcome,
    handle_click,
    new_game,
    piece_counts,
    result_message,
    status_message,
    victory_progress,
)
from sevenwonders.variants import available_variants, get_variant, load_variant_config

HELP_TEXT = "Enter 'level row col' to select or move, 'c' to cancel, 'n' for a new game, 'q' to quit."


def format_counts(state: GameState) -> str:
    counts = piece_counts(state.board)
    totals = ", ".join(f"{color.label}: {count}" for color, count in counts.totals.items())
    return f"{totals} | Victory fields: {victory_progress(state.board, state.board.layout.config)}"


def format_moves(state: GameState) -> str:
    return ", ".join(f"{move.kind.value}@{move.destination}" for move in state.legal_moves)


def parse_coordinates(raw: str) -> Optional[Tuple[int, int, int]]:
    parts = raw.replace(",", " ").split()
    if len(parts) != 3 or not all(part.lstrip("-").isdigit() for part in parts):
        return None
    level, row, col = (int(part) for part in parts)
    return level, row, col


def apply_command(state: GameState, raw: str) -> Tuple[GameState, List[str]]:
    """Apply one console command and return the next state plus messages to show."""
    command = raw.strip().lower()
    if command in {"c", "cancel"}:
        return cancel_selection(state), []
    if command in {"n", "new"}:
        return new_game(state.board.layout), ["New game."]

    coords = parse_coordinates(command)
    if coords is None:
        return state, [HELP_TEXT]

    result = handle_click(state, *coords)
    messages: List[str] = []
    if result.rejection is not None:
        messages.append(result.rejection.message)
    outcome = getattr(result, "outcome", None)
    if outcome is not None:
        messages.extend(describe_outcome(outcome, state.board.layout.config))
    final = result_message(result.state)
    if final and result.state.phase == TurnPhase.GAME_OVER and state.phase != TurnPhase.GAME_OVER:
        messages.append(final)
    return result.state, messages


def run_commands(state: GameState, commands: Iterable[str]) -> Tuple[GameState, List[str]]:
    messages: List[str] = []
    for raw in commands:
        if raw.strip().lower() in {"q", "quit", "exit"}:
            break
        state, emitted = apply_command(state, raw)
        messages.extend(emitted)
    return state, messages


def play_interactive(config: VariantConfig) -> None:
    state = new_game(config)
    print(HELP_TEXT)
    while True:
        print()
        print(state.board.render())
        print(format_counts(state))
        print(status_message(state))
        if state.phase == TurnPhase.SELECT_MOVE:
            print(f"Moves: {format_moves(state)}")
        raw = input("> ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            print("Bye.")
            return
        state, messages = apply_command(state, raw)
        for message in messages:
            print(message)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Play a Seven Wonders board game in the console.")
    parser.add_argument("--variant", default="pyramid", choices=available_variants())
    parser.add_argument("--config", help="Path to a YAML variant file (overrides --variant)")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    config = load_variant_config(args.config) if args.config else get_variant(args.variant)
    try:
        play_interactive(config)
    except (EOFError, KeyboardInterrupt):
        print()
        sys.exit(0)


if __name__ == "__main__":
    main()
