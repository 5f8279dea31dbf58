import argparse
import logging
from pathlib import Path
import sys

from dotenv import load_dotenv

# Ensure the src directory is on sys.path when running as a script
_SRC_DIR = Path(__file__).resolve().parents[1]
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from duel.application.services.campaign_service import CampaignOutcome
from duel.bootstrap import load_settings
from duel.errors import QuitRequested
from duel.presentation.campaign_menu import run_game


def _print_help_surface() -> None:
    print("\nHelp:")
    print("- In a duel type attack, defend, special, heal or help.")
    print("- Type quit at any prompt to leave.")
    print("- Catalog issues: check DUEL_SPELLS_FILE / DUEL_CHARACTERS_FILE or leave them unset for the bundled set.")


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="duel", description="Turn-based spell duelling in the terminal.")
    parser.add_argument("--spells", help="Path to the spells JSON file")
    parser.add_argument("--characters", help="Path to the characters JSON file")
    parser.add_argument("--seed", type=int, help="Seed for the combat RNG")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    load_dotenv()
    args = _parse_args(argv)
    try:
        settings = load_settings()
    except ValueError as exc:
        print(f"Invalid configuration: {exc}")
        return 2
    if args.spells:
        settings.spells_file = args.spells
    if args.characters:
        settings.characters_file = args.characters
    if args.seed is not None:
        settings.seed = args.seed
    logging.basicConfig(level=settings.log_level)

    try:
        outcome = run_game(settings)
    except QuitRequested:
        print("Thank you for playing and goodbye")
        return 0
    except KeyboardInterrupt:
        print("\nSession ended.")
        return 0
    except Exception as exc:
        logging.getLogger(__name__).debug("Unhandled error", exc_info=True)
        print("An unexpected error occurred. The game closed safely.")
        print(f"Reason: {exc}")
        _print_help_surface()
        return 1

    if outcome == CampaignOutcome.FALLEN:
        print("Better luck next term.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
