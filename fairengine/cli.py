"""
Fair Engine CLI - Generate and verify provably fair outcomes offline.

Usage:
    fairengine seed [--client]                        New server (or client) seed
    fairengine commit <server_seed>                   SHA-256 commitment of a seed
    fairengine roll <server> <client> <nonce> [--range N]
    fairengine slots <server> <client> <nonce>
    fairengine deck <server> <client> <nonce>
    fairengine verify outcome <server> <hash> <client> <nonce> <claimed> [--range N]
    fairengine verify slots <server> <hash> <client> <nonce> <r0> <r1> <r2>
    fairengine verify deck <server> <hash> <client> <nonce> <card>...

Results are printed as JSON. Exit status is 1 when verification fails or
an input is rejected.
"""

import argparse
import json
import logging
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Fair Engine - provably fair outcome tools",
        prog="fairengine",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Seed command
    seed_parser = subparsers.add_parser("seed", help="Generate a fresh seed")
    seed_parser.add_argument("--client", action="store_true", help="Generate a client seed instead")

    # Commit command
    commit_parser = subparsers.add_parser("commit", help="Hash a server seed")
    commit_parser.add_argument("server_seed")

    # Outcome commands
    roll_parser = subparsers.add_parser("roll", help="Uniform integer in [0, range]")
    _add_round_args(roll_parser)
    roll_parser.add_argument("--range", type=int, default=100, dest="range_", help="Upper bound")

    slots_parser = subparsers.add_parser("slots", help="3-reel slot outcome")
    _add_round_args(slots_parser)

    deck_parser = subparsers.add_parser("deck", help="Shuffled 52-card deck")
    _add_round_args(deck_parser)

    # Verify command
    verify_parser = subparsers.add_parser("verify", help="Verify a revealed round")
    verify_sub = verify_parser.add_subparsers(dest="kind", help="What to verify")

    v_outcome = verify_sub.add_parser("outcome", help="Numeric outcome")
    _add_claim_args(v_outcome)
    v_outcome.add_argument("claimed", type=int)
    v_outcome.add_argument("--range", type=int, default=100, dest="range_", help="Upper bound")

    v_slots = verify_sub.add_parser("slots", help="Slot reels")
    _add_claim_args(v_slots)
    v_slots.add_argument("reels", type=int, nargs=3)

    v_deck = verify_sub.add_parser("deck", help="Full deck")
    _add_claim_args(v_deck)
    v_deck.add_argument("cards", type=int, nargs="+")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    from .engine_core.errors import ValidationError

    try:
        if args.command == "seed":
            return cmd_seed(args)
        elif args.command == "commit":
            return cmd_commit(args)
        elif args.command == "roll":
            return cmd_roll(args)
        elif args.command == "slots":
            return cmd_slots(args)
        elif args.command == "deck":
            return cmd_deck(args)
        elif args.command == "verify" and args.kind:
            return cmd_verify(args)
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


def _add_round_args(parser):
    parser.add_argument("server_seed")
    parser.add_argument("client_seed")
    parser.add_argument("nonce", type=int)


def _add_claim_args(parser):
    parser.add_argument("server_seed")
    parser.add_argument("server_seed_hash")
    parser.add_argument("client_seed")
    parser.add_argument("nonce", type=int)


def _emit(payload):
    print(json.dumps(payload, indent=2))


def cmd_seed(args):
    """Print a fresh seed."""
    from .engine_core.seeds import new_client_seed, new_seed_pair

    if args.client:
        _emit({"client_seed": new_client_seed()})
    else:
        seed, seed_hash = new_seed_pair()
        _emit({"server_seed": seed, "server_seed_hash": seed_hash})
    return 0


def cmd_commit(args):
    """Print the commitment of a seed."""
    from .engine_core.seeds import commit

    _emit({"server_seed_hash": commit(args.server_seed)})
    return 0


def cmd_roll(args):
    from .engine_core.extractors import generate_outcome

    result = generate_outcome(args.server_seed, args.client_seed, args.nonce, args.range_)
    _emit({
        "outcome": result.outcome,
        "range": result.range,
        "hmac": result.hmac,
        "server_seed_hash": result.server_seed_hash,
        "client_seed": result.client_seed,
        "nonce": result.nonce,
    })
    return 0


def cmd_slots(args):
    from .engine_core.extractors import generate_slot_outcome

    _emit(generate_slot_outcome(args.server_seed, args.client_seed, args.nonce).to_dict())
    return 0


def cmd_deck(args):
    from .engine_core.extractors import deal_deck

    _emit(deal_deck(args.server_seed, args.client_seed, args.nonce).to_dict())
    return 0


def cmd_verify(args):
    """Verify a round and exit non-zero when it fails."""
    from .verifier import (
        VerificationData,
        verify_outcome,
        verify_slot_outcome,
        verify_shuffled_deck,
    )

    if args.kind == "outcome":
        result = verify_outcome(
            VerificationData(
                server_seed=args.server_seed,
                server_seed_hash=args.server_seed_hash,
                client_seed=args.client_seed,
                nonce=args.nonce,
                claimed_outcome=args.claimed,
            ),
            range=args.range_,
        )
    elif args.kind == "slots":
        result = verify_slot_outcome(
            args.server_seed, args.server_seed_hash, args.client_seed, args.nonce, args.reels
        )
    else:
        result = verify_shuffled_deck(
            args.server_seed, args.server_seed_hash, args.client_seed, args.nonce, args.cards
        )

    _emit(result.to_dict())
    return 0 if result.is_valid else 1


if __name__ == "__main__":
    sys.exit(main())
