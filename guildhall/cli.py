"""
Guildhall CLI - Command-line interface for the engine.

Usage:
    guildhall new <name> <name> [...]        Create a game, print its id
    guildhall show <game_id>                 Print the game state
    guildhall act <game_id> <type> [...]     Submit an action
    guildhall validate                       Validate the card catalog and map

Games are stored as JSON files under --store (default ~/.guildhall/games).
"""

import argparse
import json
import logging
import sys

from .engine_core.action import Action
from .engine_core.queries import standings
from .engine_core.serialization import state_to_dict
from .engine_core.state import GamePhase

logger = logging.getLogger("guildhall")

DEFAULT_STORE = "~/.guildhall/games"


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Guildhall - Card game rule engine",
        prog="guildhall",
    )
    parser.add_argument("--store", default=DEFAULT_STORE, help="Directory for saved games")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # New command
    new_parser = subparsers.add_parser("new", help="Create a new game")
    new_parser.add_argument("players", nargs="+", help="Player names in turn order")
    new_parser.add_argument("--seed", type=int, help="Random seed")

    # Show command
    show_parser = subparsers.add_parser("show", help="Show a game")
    show_parser.add_argument("game_id", help="Game id")
    show_parser.add_argument("--json", action="store_true", help="Print the raw state")

    # Act command
    act_parser = subparsers.add_parser("act", help="Submit an action")
    act_parser.add_argument("game_id", help="Game id")
    act_parser.add_argument("type", help="Action type: expand, consolidate, endTurn, ...")
    act_parser.add_argument("--player", help="Acting player id (default: current player)")
    act_parser.add_argument("--card", help="Card id")
    act_parser.add_argument("--spot", type=int, help="Map spot id")
    act_parser.add_argument("--index", type=int, help="Pending choice index")
    answer = act_parser.add_mutually_exclusive_group()
    answer.add_argument("--accept", dest="accept", action="store_true", default=None)
    answer.add_argument("--decline", dest="accept", action="store_false", default=None)
    act_parser.add_argument("--choice", help="Chosen benefit text")

    # Validate command
    subparsers.add_parser("validate", help="Validate the card catalog and map")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "new":
        cmd_new(args)
    elif args.command == "show":
        cmd_show(args)
    elif args.command == "act":
        cmd_act(args)
    elif args.command == "validate":
        cmd_validate(args)
    else:
        parser.print_help()
        sys.exit(1)


def _manager(args):
    from .games.guilds.spec import create_guilds_spec
    from .session import GameSessionManager, JsonFileStore

    spec = create_guilds_spec()
    logger.debug("Using game store %s", args.store)
    return GameSessionManager(spec=spec, store=JsonFileStore(args.store, spec))


def cmd_new(args):
    """Create a game."""
    manager = _manager(args)
    try:
        state = manager.new_game(args.players, random_seed=args.seed)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(state.game_id)


def cmd_show(args):
    """Print a game."""
    from .session import GameNotFoundError

    manager = _manager(args)
    try:
        state = manager.get(args.game_id)
    except GameNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.json:
        print(json.dumps(state_to_dict(state), indent=2))
        return

    print(f"Game {state.game_id} - {state.phase.value}, turn {state.turn_number}")
    print(f"Common deck: {state.common_deck.count} cards")
    print("Market: " + ", ".join(card.id for card in state.market))

    for player in state.players:
        marker = "*" if player is state.current_player else " "
        res = player.resources
        print(
            f"{marker} {player.player_id} {player.name}: "
            f"{res.victory_points} VP, {res.gold} gold, {player.armies} armies"
        )
        print("    hand: " + ", ".join(card.id for card in player.hand.cards))
        for guild, pile in player.guild_piles.items():
            if pile.size:
                print(f"    {guild.value}: " + ", ".join(card.id for card in pile.cards))

    awaiting = state.awaiting_input
    if awaiting is not None:
        print(f"Awaiting input: {awaiting.source_text}")

    if state.phase == GamePhase.ENDED:
        leader = standings(state)[0]
        print(f"Winner: {leader.name} with {leader.victory_points} VP")


def cmd_act(args):
    """Submit an action."""
    from .session import GameNotFoundError

    manager = _manager(args)
    try:
        state = manager.get(args.game_id)
        action = Action.from_dict({
            "type": args.type,
            "playerId": args.player or state.current_player.player_id,
            "cardId": args.card,
            "spotId": args.spot,
            "intentIndex": args.index,
            "accept": args.accept,
            "choice": args.choice,
        })
        result = manager.submit(args.game_id, action)
    except GameNotFoundError as e:
        print(f"Error: {e}")
        sys.exit(1)
    except ValueError:
        print(f"Error: Unknown action type: {args.type}")
        sys.exit(1)

    if not result.success:
        print(f"Rejected ({result.error_code}): {result.error}")
        sys.exit(1)

    for change in result.state_changes:
        print(change)

    awaiting = result.awaiting_input
    if awaiting is not None:
        print(f"Awaiting input: {awaiting.source_text}")


def cmd_validate(args):
    """Validate the catalog and map."""
    from .games.guilds.spec import create_guilds_spec
    from .spec_schema import CatalogValidationError, validate_spec

    try:
        spec = create_guilds_spec()
    except CatalogValidationError as e:
        print("Errors:")
        for error in e.errors:
            print(f"  - {error}")
        sys.exit(1)

    result = validate_spec(spec)
    print(f"{spec.game_name}: {len(spec.cards)} cards, {len(spec.spots)} spots")
    if result.warnings:
        print("\nWarnings:")
        for w in result.warnings:
            print(f"  - {w}")
    print("Valid")


if __name__ == "__main__":
    main()
