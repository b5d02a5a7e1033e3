"""Command-line interface for the club season planner.

This module provides CLI functionality over a JSON store file.
"""

# Court Planner
# Copyright (C) 2025  Court Planner developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import logging
import random
import sys
from datetime import date
from typing import List, Optional, Sequence

from courtplanner.club import Club, load_club_file
from courtplanner.constants import STORE_FILE_EXTENSION
from courtplanner.exceptions import CourtPlannerException
from courtplanner.models.season import Match, MatchType, Roster, SeasonConfig
from courtplanner.storage import JsonFileStore
from courtplanner.utils import format_date, parse_date, set_log_level, setup_logger

logger = setup_logger(__name__)

DEFAULT_STORE = f"courtplanner{STORE_FILE_EXTENSION}"


def parse_date_arg(value: str) -> date:
    """Parse a yyyy-mm-dd argument.

    Raises:
        argparse.ArgumentTypeError: If the value is not a date
    """
    try:
        return parse_date(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}'. Use yyyy-mm-dd")


def format_match(match: Match) -> str:
    names = [p or "-" for p in match.players]
    if match.match_type is MatchType.DOUBLE:
        line = f"{names[0]} & {names[1]} vs {names[2]} & {names[3]}"
    else:
        line = f"{names[0]} vs {names[1]}"
    if match.result:
        line += f"  [winner: {match.result.describe()}]"
    return (
        f"{format_date(match.date)} {match.time_slot} court {match.court} "
        f"({match.match_type.value}, {match.category}): {line}"
    )


def print_matches(matches: Sequence[Match]) -> None:
    if not matches:
        print("No matches.")
        return
    for match in matches:
        print(format_match(match))


def build_club(args: argparse.Namespace) -> Club:
    if args.club:
        config, roster = load_club_file(args.club)
    else:
        config, roster = SeasonConfig(), Roster.default()
    rng = random.Random(args.seed) if args.seed is not None else random.Random()
    return Club(JsonFileStore(args.store), config, roster, rng=rng)


# ========== Commands ==========


def cmd_plan_all(club: Club, args: argparse.Namespace) -> int:
    matches = club.plan_all(args.acting)
    print_matches(matches)
    print(f"\nPlanned {len(matches)} matches for '{club.config.name}'.")
    return 0


def cmd_plan_week(club: Club, args: argparse.Namespace) -> int:
    matches = club.plan_week(args.acting, args.date)
    print_matches(matches)
    return 0


def cmd_show(club: Club, args: argparse.Namespace) -> int:
    print_matches(club.schedule(args.date))
    return 0


def cmd_ladder(club: Club, args: argparse.Namespace) -> int:
    print(f"{'Pos':>3}  {'Player':<12} {'Played':>6} {'Won':>4} {'Lost':>4} {'Win %':>6}")
    print("-" * 42)
    for position, entry in enumerate(club.ladder(args.doubles), start=1):
        print(
            f"{position:>3}  {entry.player:<12} {entry.matches:>6} {entry.wins:>4} "
            f"{entry.losses:>4} {entry.win_percentage:>5}%"
        )
    return 0


def cmd_availability(club: Club, args: argparse.Namespace) -> int:
    available = club.reservations.toggle_availability(
        args.acting, args.player, args.date, args.slot
    )
    state = "available" if available else "unavailable"
    print(f"{args.player} is now {state} on {format_date(args.date)} {args.slot}.")
    return 0


def cmd_reserve(club: Club, args: argparse.Namespace) -> int:
    match_type = MatchType.DOUBLE if len(args.players) == 4 else MatchType.SINGLE
    match = club.reservations.reserve(
        args.acting,
        args.date,
        args.slot,
        args.court,
        match_type,
        args.players,
        args.category,
    )
    print(format_match(match))
    return 0


def cmd_remove(club: Club, args: argparse.Namespace) -> int:
    match = club.reservations.remove(args.acting, args.date, args.slot, args.court)
    print(f"Removed {match.describe()}.")
    return 0


def cmd_winner(club: Club, args: argparse.Namespace) -> int:
    if len(args.players) == 1:
        match = club.results.mark_winner(
            args.acting, args.date, args.slot, args.court, args.players[0]
        )
    else:
        match = club.results.mark_winning_team(
            args.acting, args.date, args.slot, args.court, args.players
        )
    print(format_match(match))
    return 0


def cmd_clear(club: Club, args: argparse.Namespace) -> int:
    removed = club.reservations.clear_season(args.acting)
    print(f"Removed {removed} matches.")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="courtplanner",
        description="Plan and manage a tennis club season",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Plan the whole season as admin
  courtplanner --as Mattias --seed 7 plan-all

  # Re-plan one evening
  courtplanner --as Mattias plan-week 2025-10-05

  # Opt out of a slot
  courtplanner --as Ruben availability Ruben 2025-10-05 18u30-19u30
        """,
    )

    parser.add_argument(
        "--store",
        default=DEFAULT_STORE,
        help=f"JSON store file (default: {DEFAULT_STORE})",
    )
    parser.add_argument("--club", help="Load season and roster from JSON club file")
    parser.add_argument(
        "--as", dest="acting", help="Player performing the action (admin for planning)"
    )
    parser.add_argument("--seed", type=int, help="Random seed for reproducibility")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("plan-all", help="Plan every slot of the season")
    p.set_defaults(handler=cmd_plan_all)

    p = sub.add_parser("plan-week", help="Re-plan a single playing day")
    p.add_argument("date", type=parse_date_arg)
    p.set_defaults(handler=cmd_plan_week)

    p = sub.add_parser("show", help="Show stored matches")
    p.add_argument("date", type=parse_date_arg, nargs="?")
    p.set_defaults(handler=cmd_show)

    p = sub.add_parser("ladder", help="Show the singles ladder")
    p.add_argument(
        "--doubles", action="store_true", help="Show the doubles ladder instead"
    )
    p.set_defaults(handler=cmd_ladder)

    p = sub.add_parser("availability", help="Toggle a player's availability")
    p.add_argument("player")
    p.add_argument("date", type=parse_date_arg)
    p.add_argument("slot")
    p.set_defaults(handler=cmd_availability)

    p = sub.add_parser("reserve", help="Book a court (2 players singles, 4 doubles)")
    p.add_argument("date", type=parse_date_arg)
    p.add_argument("slot")
    p.add_argument("court", type=int)
    p.add_argument("players", nargs="+")
    p.add_argument(
        "--category",
        choices=["training", "wedstrijd"],
        default="training",
        help="Match category (default: training)",
    )
    p.set_defaults(handler=cmd_reserve)

    p = sub.add_parser("remove", help="Remove a reservation")
    p.add_argument("date", type=parse_date_arg)
    p.add_argument("slot")
    p.add_argument("court", type=int)
    p.set_defaults(handler=cmd_remove)

    p = sub.add_parser(
        "winner", help="Record the winner (singles) or winning team (doubles)"
    )
    p.add_argument("date", type=parse_date_arg)
    p.add_argument("slot")
    p.add_argument("court", type=int)
    p.add_argument("players", nargs="+", metavar="player")
    p.set_defaults(handler=cmd_winner)

    p = sub.add_parser("clear", help="Remove every match of the season")
    p.set_defaults(handler=cmd_clear)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    # Configure logging
    set_log_level(logging.DEBUG if args.verbose else logging.INFO)

    try:
        club = build_club(args)
        return args.handler(club, args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except CourtPlannerException as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
