import argparse
import json
import random
from pathlib import Path

from whatcard.api.app import run as run_api
from whatcard.api.deps import get_orchestrator
from whatcard.config import settings
from whatcard.domain.models import WalletState
from whatcard.logging_setup import setup_logging
from whatcard.schemas.requests import RecommendRequest


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="WhatCard unified entrypoint")
    sub = parser.add_subparsers(dest="mode")

    sub.add_parser("api", help="Run the HTTP API (default)")

    rank = sub.add_parser("rank", help="Rank the active cards of a saved wallet snapshot")
    rank.add_argument("--state", required=True, help="Path to a wallet snapshot JSON file")
    rank.add_argument("--merchant", required=True)
    rank.add_argument("--amount", required=True)
    rank.add_argument("--category")
    rank.add_argument("--benefit", default="", help="Apply only the perk with this exact name")

    seed = sub.add_parser("seed", help="Create a randomized starter wallet for a user")
    seed.add_argument("--user-id", required=True)
    seed.add_argument("--random-seed", type=int)
    return parser


def cmd_rank(args: argparse.Namespace) -> None:
    state = WalletState.model_validate_json(Path(args.state).read_text(encoding="utf-8"))
    request = RecommendRequest(
        merchant=args.merchant,
        amount=args.amount,
        category=args.category,
        benefit_override=args.benefit,
    )
    ranked = get_orchestrator().rank_state(state, request)
    print(json.dumps([item.to_json_dict() for item in ranked], indent=2))


def cmd_seed(args: argparse.Namespace) -> None:
    rng = random.Random(args.random_seed) if args.random_seed is not None else None
    state = get_orchestrator().seed_state(args.user_id, rng)
    print(f"Seeded {args.user_id}: {len(state.active_card_ids)} active card(s), {len(state.active_offers)} offer(s)")


def main() -> None:
    args = build_parser().parse_args()

    if args.mode in (None, "api"):
        run_api()
        return

    setup_logging(settings.log_level)
    if args.mode == "rank":
        cmd_rank(args)
        return

    cmd_seed(args)


if __name__ == "__main__":
    main()
