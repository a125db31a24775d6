#!/usr/bin/env python3
"""
DEV Price Bot CLI Tool

Check the price feed and the text the bot would show without connecting to Discord.
"""

import argparse
import logging
import sys
from typing import Optional
from pricebot.bot.commands import COMMANDS
from pricebot.config import get_settings
from pricebot.formatting import presence_title, presence_state, price_reply, username_for
from pricebot.services.coingecko_client import fetch_token_price_sync
from pricebot.logging_config import setup_logging

logger = logging.getLogger(__name__)

def show_price(asset_id: Optional[str] = None) -> None:
    """Fetch one snapshot and print everything rendered from it."""
    settings = get_settings()
    asset_id = asset_id or settings.price_asset_id
    label = settings.price_label

    result = fetch_token_price_sync(asset_id, settings)
    if not result.ok:
        logger.error(f"Could not fetch price for {asset_id}: {result.error} ({result.detail})")
        sys.exit(1)

    snapshot = result.snapshot
    print(f"\n{'='*60}")
    print(f"PRICE SNAPSHOT: {asset_id}")
    print(f"{'='*60}")
    print(f"  Price:       ${snapshot.price}")
    print(f"  24h change:  {snapshot.change_24h:+.2f}%")
    print(f"  24h volume:  ${snapshot.volume_24h:,.2f}")
    print()
    print("Presence:")
    print(f"  Title:       {presence_title(snapshot.price, label)}")
    print(f"  State:       {presence_state(snapshot.change_24h, snapshot.volume_24h)}")
    print(f"Username:      {username_for(snapshot.price, label)}")
    print(f"/price reply:  {price_reply(snapshot.price, label).rstrip()}")
    print(f"{'='*60}\n")

def show_commands() -> None:
    """Print the slash commands registered at startup."""
    for command in COMMANDS:
        print(f"/{command.name:<8} {command.description}")

def main():
    parser = argparse.ArgumentParser(
        description="DEV Price Bot CLI - Inspect the price feed locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Fetch and render the current price
  python cli.py --price

  # Another CoinGecko id
  python cli.py --price --asset bitcoin

  # List slash commands
  python cli.py --commands
        """
    )

    parser.add_argument(
        '--price', '-p',
        action='store_true',
        help='Fetch the current price and show rendered presence/reply text'
    )
    parser.add_argument(
        '--asset', '-a',
        help='CoinGecko asset id (default: PRICE_ASSET_ID setting)'
    )
    parser.add_argument(
        '--commands',
        action='store_true',
        help='List slash commands'
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO)'
    )

    args = parser.parse_args()

    setup_logging(args.log_level)

    if args.price:
        show_price(args.asset)
    elif args.commands:
        show_commands()
    else:
        parser.print_help()
        sys.exit(1)

if __name__ == '__main__':
    main()
