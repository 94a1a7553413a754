"""Main entry point for running magpie.

Every unrecoverable error surfaces here as a ``MagpieError`` and ends the
process with exit code 1. magpie never restarts anything itself; run it
under an init system or container runtime that does.
"""

import argparse
import asyncio
import logging
import signal
import sys
from typing import NoReturn

from aiomqtt import Client, MqttError
from pydantic import ValidationError

from . import __version__
from .channel import DeliveryChannel
from .config import Disabled, Settings, get_settings
from .errors import BrokerConnectionError, MagpieError
from .producers import (
    BaseProducer,
    DaylightProducer,
    DayPhaseProducer,
    SeasonProducer,
    WeatherProducer,
)
from .publisher import BrokerClientProtocol, Publisher

logger = logging.getLogger(__name__)

SOURCES = ["season", "dayphase", "daylight", "weather"]


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Reduce noise from httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_producers(
    settings: Settings,
    channel: DeliveryChannel,
    sources: list[str] | None = None,
) -> list[BaseProducer]:
    """Resolve source configuration once and build the enabled producers.

    Logs one line per source saying whether it is enabled or disabled.

    Raises:
        ConfigurationError: A source is enabled but its settings are incomplete.
    """
    selected = sources or SOURCES
    producers: list[BaseProducer] = []

    for name in selected:
        if name == "season":
            source = settings.season.resolve()
        elif name == "dayphase":
            source = settings.dayphase.resolve()
        elif name == "daylight":
            source = settings.daylight.resolve()
        elif name == "weather":
            source = settings.weather.resolve()
        else:
            raise ValueError(f"unknown source: {name}")

        if isinstance(source, Disabled):
            logger.info("%s source %s, disabled", source.source, source.reason)
            continue

        if name == "season":
            producers.append(SeasonProducer(source, channel))
        elif name == "dayphase":
            producers.append(DayPhaseProducer(source, channel))
        elif name == "daylight":
            producers.append(DaylightProducer(source, channel))
        else:
            producers.append(WeatherProducer(source, channel))

        logger.info("%s source enabled, topic='%s'", name, source.topic)

    return producers


async def run_producer(producer: BaseProducer, run_once: bool = False) -> None:
    """Run a single producer, once or forever.

    Args:
        producer: The producer to run.
        run_once: If True, run one tick and return instead of looping.
    """
    try:
        if run_once:
            logger.debug("Running %s once", producer.name)
            await producer.run_once()
        else:
            await producer.run_forever()
    finally:
        await producer.close()


async def supervise(
    client: BrokerClientProtocol,
    channel: DeliveryChannel,
    producers: list[BaseProducer],
    prefix: str,
    run_once: bool = False,
    shutdown_event: asyncio.Event | None = None,
) -> None:
    """Run producers and the publisher until done, shut down, or one fails.

    The first task to fail cancels all others and its exception is re-raised.
    With ``run_once`` the channel is closed after every producer finished its
    tick, and this returns once the publisher drained it.
    """
    publisher = Publisher(client, channel, prefix)
    publisher_task = asyncio.create_task(publisher.run(), name="publisher")
    producer_tasks = [
        asyncio.create_task(run_producer(producer, run_once), name=producer.name)
        for producer in producers
    ]

    watched: set[asyncio.Task] = {publisher_task, *producer_tasks}
    stop_task: asyncio.Task | None = None
    if shutdown_event is not None:
        stop_task = asyncio.create_task(shutdown_event.wait(), name="shutdown")
        watched.add(stop_task)

    if run_once and not producer_tasks:
        await channel.close()

    try:
        while True:
            done, _ = await asyncio.wait(watched, return_when=asyncio.FIRST_COMPLETED)

            for task in done:
                watched.discard(task)
                if task is stop_task:
                    logger.info("Shutdown requested, stopping producers")
                    return
                if task.cancelled():
                    continue
                exc = task.exception()
                if exc is not None:
                    logger.debug("%s failed: %s", task.get_name(), exc)
                    raise exc
                if task is publisher_task:
                    return

            if run_once and not any(task in watched for task in producer_tasks):
                await channel.close()
    finally:
        all_tasks = [publisher_task, *producer_tasks]
        if stop_task is not None:
            all_tasks.append(stop_task)
        for task in all_tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*all_tasks, return_exceptions=True)


async def run_pipeline(
    settings: Settings,
    run_once: bool = False,
    sources: list[str] | None = None,
) -> None:
    """Connect to the broker and run all enabled producers.

    Args:
        settings: Application settings.
        run_once: If True, run each producer once, publish and exit.
        sources: Source names to run (season, dayphase, daylight, weather).
                 If None, every source is considered.

    Raises:
        MagpieError: Any configuration, fetch, parse, connection or publish failure.
    """
    hostname, port = settings.mqtt.broker_address()
    prefix = settings.mqtt.topic_prefix()

    if "prefix" in settings.mqtt.model_fields_set:
        logger.info("`MQTT_PREFIX` set to `%s`", prefix)
    else:
        logger.info("`MQTT_PREFIX` undefined using default `%s` prefix", prefix)

    channel = DeliveryChannel()
    producers = build_producers(settings, channel, sources)
    if not producers:
        logger.warning("No sources enabled. Set one or more *_TOPIC variables")

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, shutdown_event.set)

    try:
        async with Client(
            hostname,
            port=port,
            identifier=settings.mqtt.client_id,
            keepalive=settings.mqtt.keepalive_seconds,
            timeout=settings.mqtt.timeout_seconds,
        ) as client:
            logger.info("Connected to MQTT broker %s:%d", hostname, port)
            await supervise(
                client,
                channel,
                producers,
                prefix,
                run_once=run_once,
                shutdown_event=shutdown_event,
            )
    except MqttError as e:
        raise BrokerConnectionError(f"MQTT broker {hostname}:{port}: {e}") from e
    finally:
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.remove_signal_handler(sig)

    logger.info("Disconnected from MQTT broker")


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="magpie - publish public data sources to an MQTT broker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run all enabled sources continuously
  MQTT_HOST=tcp://127.0.0.1:1883 SEASON_TOPIC=cron/season magpie

  # Publish every enabled source once and exit (useful for testing or cron)
  magpie --once

Environment Variables:
  MQTT_HOST            Broker address, e.g. tcp://127.0.0.1:1883 (required)
  MQTT_PREFIX          Topic prefix (default: /home.arpa)
  SEASON_TOPIC         Enables the season source
  DAYPHASE_TOPIC       Enables the day phase source
  DAYLIGHT_TOPIC       Enables the daylight source, needs DAYLIGHT_LATITUDE
                       and DAYLIGHT_LONGITUDE
  WEATHER_TOPIC        Enables the weather source, needs WEATHER_REGION
        """,
    )

    parser.add_argument(
        "--sources",
        nargs="+",
        choices=SOURCES,
        help="Specific sources to consider (default: all)",
    )

    parser.add_argument(
        "--once",
        action="store_true",
        help="Publish each enabled source once and exit",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args()


def main() -> NoReturn:
    """Main entry point."""
    args = parse_args()

    try:
        settings = get_settings()
    except ValidationError as e:
        setup_logging(args.log_level or "INFO")
        logger.critical("Invalid configuration: %s", e)
        sys.exit(1)

    setup_logging(args.log_level or settings.log_level)
    logger.info("magpie %s starting", __version__)

    try:
        asyncio.run(
            run_pipeline(
                settings=settings,
                run_once=args.once,
                sources=args.sources,
            )
        )
    except MagpieError as e:
        logger.critical("%s: %s", e.__class__.__name__, e)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")

    logger.info("Shutdown complete")
    sys.exit(0)


if __name__ == "__main__":
    main()
