"""
prime-sentinel Slack Bot - Main Entry Point

Central bot that:
- Hears ambient channel messages and runs plugin hear actions
- Routes mentions and DMs to plugin commands
- Keeps replies in sync when messages are edited
"""

import os
import sys
import argparse
import logging
from pathlib import Path
from dotenv import load_dotenv

from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler

from core.config import BotConfig
from core.dispatcher import Dispatcher
from core.errors import ConfigurationError
from core.events import process_event
from core.responder import Responder
from core.user_info import SlackUserInfoFinder

BOT_DIR = Path(__file__).parent
DEFAULT_CONFIG = "bots/prime_sentinel.json"

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def parse_args():
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="prime-sentinel Slack bot")
    parser.add_argument(
        "--config",
        type=str,
        default=DEFAULT_CONFIG,
        help="Path to bot config JSON file (e.g., bots/prime_sentinel.json)"
    )
    return parser.parse_args()


def load_environment(env_file: str | None = None):
    """Load and validate environment variables."""
    if env_file:
        env_path = BOT_DIR / env_file
    else:
        env_path = BOT_DIR / ".env"
    load_dotenv(env_path)

    required_vars = ["SLACK_BOT_TOKEN", "SLACK_APP_TOKEN"]
    missing = [var for var in required_vars if not os.getenv(var)]

    if missing:
        logger.error(
            f"Missing required environment variables: {', '.join(missing)}"
        )
        sys.exit(1)


def register_handlers(
    app: App,
    dispatcher: Dispatcher,
    responder: Responder,
    bot_user_id: str | None
) -> None:
    """Register slash commands and event handlers on the Bolt app."""

    @app.command("/bot-help")
    def handle_help_command(ack, command, say):
        """Show available commands."""
        ack()
        say(dispatcher.help_text())

    @app.event("message")
    def handle_message(event):
        """Handle new and edited messages in channels and DMs."""
        process_event(event, dispatcher, responder, bot_user_id)

    @app.event("app_mention")
    def handle_mention(event):
        """Mentions are also delivered as message events and handled there."""
        pass


def main():
    """Start the bot."""
    args = parse_args()

    try:
        config = BotConfig.from_file(BOT_DIR / args.config)
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    load_environment(config.env_file)
    app = App(token=os.environ["SLACK_BOT_TOKEN"])

    bot_user_id = app.client.auth_test().get("user_id")
    logger.info(f"Starting {config.name} {config.version} as {bot_user_id}...")

    try:
        dispatcher = Dispatcher(
            config=config,
            user_info_finder=SlackUserInfoFinder(app.client),
        )
    except ConfigurationError as e:
        logger.error(f"Invalid plugin configuration: {e}")
        sys.exit(1)

    register_handlers(app, dispatcher, Responder(app.client), bot_user_id)

    handler = SocketModeHandler(app, os.environ["SLACK_APP_TOKEN"])

    logger.info(f"Loaded {len(dispatcher.plugins)} plugins")
    logger.info("Bot is running! Press Ctrl+C to stop.")
    handler.start()


if __name__ == "__main__":
    main()
