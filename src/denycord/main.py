"""
Denylist Moderation Bot
=======================

A Discord bot that deletes messages matching a denylist of regular expressions.
The denylist file is watched and reloaded on every change, so rules can be edited
without restarting the bot.
"""

import argparse
import asyncio
import os
import signal
import sys
from pathlib import Path
from typing import Sequence

import discord
from dotenv import load_dotenv

from denycord.bot.cogs import events_listener, message_listener
from denycord.configuration.app_configuration import CONFIG_PATH, AppConfig
from denycord.denylist.denylist_store import DenylistStore
from denycord.denylist.denylist_watcher import DenylistWatcher
from denycord.denylist.exemptions import Exemption
from denycord.util.logger import get_logger, handle_exception


logger = get_logger("main")


def resolve_base_dir() -> Path:
    """Determine the base directory of the project.

    Resolution order:
    1. DENYCORD_HOME environment variable, if set.
    2. If running in a frozen/compiled context, use the executable's directory.
    3. Otherwise, assume running from source and use the grandparent of this file's directory.
    """
    if env_home := os.getenv("DENYCORD_HOME"):
        return Path(env_home).resolve()

    if getattr(sys, "frozen", False) or getattr(sys, "compiled", False):
        return Path(sys.argv[0]).resolve().parent

    return Path(__file__).resolve().parents[2]


BASE_DIR = resolve_base_dir()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="denycord", description="Delete Discord messages matching a denylist.")
    parser.add_argument("--token", help="Discord bot token (defaults to DISCORD_BOT_TOKEN)")
    parser.add_argument(
        "--denylist",
        help="Path to the denylist of regular expressions, one per line (defaults to DENYCORD_DENYLIST)",
    )
    parser.add_argument("--config", type=Path, help="Path to app_config.yml")
    return parser.parse_args(argv)


def load_environment(args: argparse.Namespace, config: AppConfig) -> tuple[str, Path]:
    """Load environment variables and resolve the bot token and denylist path.

    Command-line flags win over environment variables, which win over the
    ``denylist_path`` config key.

    Returns
    -------
    tuple[str, Path]
        The Discord bot token and the denylist file path.

    Raises
    ------
    SystemExit
        If the token or the denylist path is missing.
    """
    load_dotenv(dotenv_path=BASE_DIR / ".env")

    token = args.token or os.getenv("DISCORD_BOT_TOKEN")
    if not token:
        logger.critical("'DISCORD_BOT_TOKEN' environment variable not set. Bot cannot start.")
        sys.exit(1)

    denylist = args.denylist or os.getenv("DENYCORD_DENYLIST")
    denylist_path = Path(denylist) if denylist else config.denylist_path
    if denylist_path is None:
        logger.critical("No denylist path given (--denylist, DENYCORD_DENYLIST or denylist_path). Bot cannot start.")
        sys.exit(1)

    return token, denylist_path


def build_intents() -> discord.Intents:
    """Construct the intents needed to read and delete guild messages."""
    intents = discord.Intents.default()
    intents.message_content = True
    intents.guilds = True
    intents.messages = True
    return intents


def load_cogs(discord_bot_instance: discord.Bot, store: DenylistStore, exemptions: Sequence[Exemption]) -> None:
    """Register the Denycord cogs, handing them the shared denylist store."""
    events_listener.setup(discord_bot_instance, store)
    message_listener.setup(discord_bot_instance, store, exemptions)

    logger.info("All cogs loaded successfully.")


def create_bot(store: DenylistStore, exemptions: Sequence[Exemption]) -> discord.Bot:
    """Instantiate the Discord bot and register all cogs."""
    bot = discord.Bot(intents=build_intents())
    load_cogs(bot, store, exemptions)
    return bot


def install_signal_handlers(stop_event: asyncio.Event) -> None:
    """Set ``stop_event`` on SIGINT/SIGTERM where the event loop supports it."""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except (NotImplementedError, RuntimeError):
            # Windows event loops: Ctrl-C still arrives as KeyboardInterrupt
            logger.debug("Signal handler for %s not supported on this platform", sig)


async def start_bot(bot: discord.Bot, token: str) -> int:
    """Run the Discord connection until it is closed, returning an exit code."""
    logger.info("Attempting to connect to Discord…")
    try:
        await bot.start(token)
    except asyncio.CancelledError:
        logger.info("Discord bot start cancelled; shutting down")
    except discord.LoginFailure as exc:
        logger.critical("Discord rejected the bot token: %s", exc)
        return 1
    except Exception as exc:
        logger.critical("Discord bot runtime error: %s", exc)
        return 1
    finally:
        logger.info("Discord bot start routine finished.")
    return 0


async def shutdown_runtime(bot: discord.Bot) -> None:
    """Close the Discord connection if it is still open."""
    try:
        if not bot.is_closed():
            await bot.close()
    except Exception as exc:
        logger.exception("Error while closing the Discord bot: %s", exc)

    logger.info("Shutdown complete.")


async def run_bot_session(bot: discord.Bot, token: str, watcher: DenylistWatcher, stop_event: asyncio.Event) -> int:
    """Run the bot and the denylist watcher until either the bot exits or a stop is requested."""
    watcher_task = asyncio.create_task(watcher.run(stop_event), name="denycord-denylist-watcher")
    bot_task = asyncio.create_task(start_bot(bot, token), name="denycord-discord-bot")
    stop_task = asyncio.create_task(stop_event.wait(), name="denycord-stop-signal")

    try:
        await asyncio.wait({bot_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        if stop_event.is_set():
            logger.info("Shutdown requested.")
        stop_event.set()
        await shutdown_runtime(bot)
        exit_code = await bot_task
        await watcher_task
        stop_task.cancel()

    return exit_code


async def async_main(argv: Sequence[str] | None = None) -> int:
    """Bootstrap configuration, the denylist and the bot, returning an exit code."""
    args = parse_args(argv)
    config = AppConfig(args.config or BASE_DIR / CONFIG_PATH)
    token, denylist_path = load_environment(args, config)

    store = DenylistStore()
    watcher = DenylistWatcher(store, denylist_path, setup_retry_seconds=config.setup_retry_seconds)

    try:
        bot = create_bot(store, config.exemptions)
    except Exception as exc:
        logger.critical("Failed to initialize Discord bot: %s", exc)
        return 1

    stop_event = asyncio.Event()
    install_signal_handlers(stop_event)
    return await run_bot_session(bot, token, watcher, stop_event)


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint that runs the async runtime and returns the process exit code."""
    sys.excepthook = handle_exception
    logger.info("Starting Denylist Moderation Bot…")
    try:
        return asyncio.run(async_main(argv))
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user.")
        return 0
    except SystemExit as exit_exc:
        code = exit_exc.code
        if isinstance(code, int):
            return code
        return 0 if code is None else 1


if __name__ == "__main__":
    sys.exit(main())
