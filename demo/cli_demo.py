#!/usr/bin/env python3
"""
Interactive CLI demo for the count resolver.

Type spoken-style commands ("add 5 shrimp", "rebs at twelve") against a
master list and watch counts change. Auto-committed commands are applied
immediately; anything needing confirmation asks first.
"""
import argparse
import sys

from dotenv import load_dotenv

# Imports assume the package is installed or PYTHONPATH=src is set
from count_resolver import (
    CountLedger,
    DecisionState,
    ResolutionEngine,
    ResolutionRequest,
    UNMAPPED,
    learn_alias,
    load_config_from_env,
)

# Load environment variables
load_dotenv()

DEFAULT_ITEMS = ["SHRIMP SKEWER", "CHICKEN BREAST", "SALMON FILLET", "BEEF TENDERLOIN", "RIBS", "CRABS"]


def print_banner(items):
    """Print welcome banner."""
    print("\n" + "=" * 60)
    print("  Count Resolver - Interactive CLI Demo")
    print("=" * 60)
    print(f"\nItems: {', '.join(items)}")
    print("Try: 'add 5 shrimp skewer', 'ribs at twelve', 'erase crabs'")
    print("Type 'counts' to show counts, 'quit' or 'exit' to end the session.")
    print("-" * 60 + "\n")


def print_decision(decision):
    """Print formatted decision."""
    operation = decision.operation.value if decision.operation else "-"
    print(f"  State:  {decision.decision_state.value}")
    print(f"  Item:   {decision.canonical_item}")
    print(f"  Action: {operation} {decision.value if decision.value is not None else '?'}")
    choices = [choice for choice in decision.top_choices if choice != UNMAPPED]
    if choices:
        print(f"  Top:    {', '.join(choices)}")


def confirm(decision):
    """Ask the user to pick an item and confirm; returns the item or None."""
    choices = [choice for choice in decision.top_choices if choice != UNMAPPED]
    if decision.operation is None or decision.value is None:
        print("  Please repeat with an operation and a quantity.")
        return None
    for index, choice in enumerate(choices, start=1):
        print(f"  [{index}] {decision.operation.value} {decision.value} {choice}")
    answer = input("  Pick a number (enter to skip): ").strip()
    if answer.isdigit() and 1 <= int(answer) <= len(choices):
        return choices[int(answer) - 1]
    return None


def main():
    """Main CLI loop."""
    parser = argparse.ArgumentParser(description="Resolve spoken count commands interactively")
    parser.add_argument("items", nargs="*", help="Canonical item names (defaults to a sample list)")
    parser.add_argument("--learn", action="store_true", help="Learn aliases from auto-committed commands")
    args = parser.parse_args()

    items = args.items or DEFAULT_ITEMS
    print_banner(items)

    config = load_config_from_env()
    engine = ResolutionEngine(config)
    ledger = CountLedger(items)
    aliases = {}

    while True:
        try:
            transcript = input("Say: ").strip()

            if not transcript:
                continue

            if transcript.lower() in ['quit', 'exit', 'q']:
                print("\nGoodbye!\n")
                break

            if transcript.lower() == "counts":
                for item, count in ledger.counts.items():
                    print(f"  {item}: {count}")
                continue

            decision = engine.resolve(ResolutionRequest(
                transcript=transcript,
                canonical_items=items,
                alias_table=aliases,
                allow_alias_auto_save=args.learn,
            ))
            print_decision(decision)

            if decision.decision_state is DecisionState.AUTO_COMMIT:
                count = ledger.apply_decision(decision)
                print(f"  -> {decision.canonical_item} is now {count}")
                if decision.alias_to_save:
                    aliases = learn_alias(aliases, decision.canonical_item, decision.alias_to_save)
                    print(f"  Learned alias '{decision.alias_to_save}'")
            elif decision.decision_state is DecisionState.NEEDS_CONFIRMATION:
                item = confirm(decision)
                if item:
                    count = ledger.apply(decision.operation, item, decision.value)
                    print(f"  -> {item} is now {count}")
            else:
                print("  Not recognised. Please repeat or pick manually.")
            print("-" * 60)

        except KeyboardInterrupt:
            print("\n\nInterrupted. Goodbye!\n")
            break
        except EOFError:
            print("\n\nGoodbye!\n")
            break

    return 0


if __name__ == "__main__":
    sys.exit(main())
