"""Command-line interface for the Discord Food Scanner."""

import argparse
import logging
import signal
import sys
from dataclasses import replace

from dotenv import load_dotenv

from .config import Config, apply_environment, load_config
from .providers import VisionAnalyzer
from .store import FoodStore
from .transport import DiscordTransport
from .bot import FoodBot


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Discord Food Scanner - Identify food and receipts from photos",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  BOT_TOKEN     Discord bot token
  GEMINI_API    API key for the vision model
  AI_MODEL      Vision model name
  DB_FILE       SQLite database file

Examples:
  %(prog)s                          # Use defaults and environment
  %(prog)s -c config.yaml           # Use specific config file
  %(prog)s --db ~/foods.db          # Use a specific database
  %(prog)s --slider-timeout 0       # Navigation buttons never expire
""",
    )

    parser.add_argument(
        "-c", "--config",
        metavar="FILE",
        help="Path to YAML configuration file",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    parser.add_argument(
        "--db",
        metavar="FILE",
        help="SQLite database file for saved foods",
    )

    parser.add_argument(
        "--model",
        metavar="NAME",
        help="Vision model name",
    )

    parser.add_argument(
        "--slider-timeout",
        metavar="SECONDS",
        type=float,
        help="Seconds before navigation buttons are disabled (0 = never)",
    )

    return parser.parse_args()


def main() -> int:
    """Main entry point."""
    args = parse_args()
    setup_logging(args.verbose)

    logger = logging.getLogger(__name__)

    load_dotenv()

    # Load configuration
    if args.config:
        try:
            config = load_config(args.config)
        except FileNotFoundError:
            logger.error(f"Config file not found: {args.config}")
            return 1
        except ValueError as e:
            logger.error(f"Invalid config file {args.config}: {e}")
            return 1
    else:
        config = Config()

    config = apply_environment(config)

    # Override config with command line arguments
    if args.db:
        config = replace(config, database_file=args.db)
    if args.model:
        config = replace(config, ai_model=args.model)
    if args.slider_timeout is not None:
        if args.slider_timeout < 0:
            logger.error("--slider-timeout must be >= 0")
            return 1
        config = replace(config, slider_timeout_seconds=args.slider_timeout)

    if not config.bot_token:
        logger.error("No Discord bot token. Set BOT_TOKEN or discord.token in the config file.")
        return 1

    # Create components
    try:
        store = FoodStore(config.get_database_path())
        analyzer = VisionAnalyzer(
            api_key=config.ai_api_key,
            model=config.ai_model,
            base_url=config.ai_base_url,
            timeout=config.ai_timeout_seconds,
        )
        transport = DiscordTransport(
            token=config.bot_token,
            request_timeout=config.request_timeout_seconds,
        )
        bot = FoodBot(transport, analyzer, store, config)
    except Exception as e:
        logger.error(f"Failed to initialize bot: {e}")
        return 1

    # Set up signal handlers for graceful shutdown
    def signal_handler(sig, frame):
        logger.info("Shutdown signal received")
        bot.stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    # Start bot
    logger.info("Starting Food Scanner bot...")
    logger.info(f"  Database: {config.get_database_path()}")
    logger.info(f"  Model: {config.ai_model}")
    logger.info(f"  Slider timeout: {config.slider_timeout_seconds}s")

    try:
        bot.start()
        logger.info("Bot running. Press Ctrl+C to stop.")

        # Keep running
        signal.pause()

    except Exception as e:
        logger.error(f"Bot error: {e}")
        return 1
    finally:
        bot.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
