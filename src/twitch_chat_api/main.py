#!/usr/bin/env python3
"""Command-line entry point for twitch-chat-api."""

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from pathlib import Path

import aiohttp

from .api import TwitchApiClient, TwitchApiError
from .chat.emotes import parse_emote_tag, rewrite_emote_markup
from .core.settings import Settings

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    # Suppress noisy third-party loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="twitch-chat-api")
    parser.add_argument("--config", type=Path, default=None, help="settings.json to use")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    markup = sub.add_parser("markup", help="rewrite native emotes in a message as <img> markup")
    markup.add_argument("message")
    markup.add_argument("--emotes", default="", help="IRC emotes tag, e.g. 25:0-4,12-16")

    for name, arg, text in (
        ("user", "login", "look up a user by login or id"),
        ("mods", "login", "list the moderators of a channel"),
        ("modchannels", "login", "list the channels a user moderates"),
        ("bttv", "channel_id", "BTTV emotes for a Twitch user id"),
        ("ffz", "channel", "FFZ emotes for a channel login"),
    ):
        cmd = sub.add_parser(name, help=text)
        cmd.add_argument(arg)
    return parser


def _to_json(value) -> object:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, list):
        return [_to_json(v) for v in value]
    return value


async def _run_api_command(args: argparse.Namespace, settings: Settings) -> object:
    async with TwitchApiClient(settings.twitch) as client:
        if args.command == "user":
            return await client.get_user_info(args.login)
        if args.command == "mods":
            return await client.get_user_moderators(args.login)
        if args.command == "modchannels":
            return await client.fetch_mod_channels(args.login)
        if args.command == "bttv":
            return (await client.get_bttv_emotes(args.channel_id)).emotes
        if args.command == "ffz":
            return (await client.get_ffz_emotes(args.channel)).emotes
    raise ValueError(f"unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "markup":
        result = rewrite_emote_markup(args.message, parse_emote_tag(args.emotes))
        print(json.dumps(result, indent=2, ensure_ascii=False))
        return 0

    settings = Settings.load(args.config)
    try:
        result = asyncio.run(_run_api_command(args, settings))
    except (TwitchApiError, aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

    print(json.dumps(_to_json(result), indent=2, default=str, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
