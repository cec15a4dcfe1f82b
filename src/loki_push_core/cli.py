"""loki-push-demo: generate business logs and ship them to a chosen sink."""

import logging
import sys
from argparse import ArgumentParser
from typing import Callable, Optional

from .client import LokiPushClient
from .config import DEFAULT_CONFIG_PATH, DemoConfig, load_config, validate_alloy, validate_cloud
from .demo import generate_logs
from .exceptions import LokiConfigurationError, LokiEncodingError
from .sinks import ConsoleSink, EventLogSink, FileSink, LokiPushSink, Sink, TeeSink

DEFAULT_COUNT = 10
METHODS = ["file", "alloy", "eventlog", "cloud"]

BASE_LABELS = {"app": "LokiDemo", "source": "python-demo"}


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="loki-push-demo",
        description="Generate realistic business logs and send them to a file, Loki or the OS event log.",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the JSON config file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--method",
        choices=METHODS,
        help="Logging method; prompts interactively when omitted",
    )
    parser.add_argument(
        "--count",
        type=int,
        help=f"Number of logs to generate; prompts when omitted (default: {DEFAULT_COUNT})",
    )
    parser.add_argument(
        "--no-delay",
        action="store_true",
        help="Do not pause between generated logs",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Console log level (default: INFO)",
    )
    return parser


def choose_method(config: DemoConfig, prompt: Optional[Callable[[str], str]] = None) -> str:
    """Show the interactive menu and return the chosen method name."""
    prompt = prompt or input
    print("=== Loki Demo - Choose Logging Method ===")
    print(f"1. Log to file ({config.log_file_path})")
    print(f"2. Log directly to Alloy ({config.loki_alloy_url})")
    print(f"3. Log to OS event log (Source: {config.event_log_source})")
    print(f"4. Log to Grafana Cloud ({config.loki_cloud_url})")
    choice = prompt("Enter your choice (1, 2, 3 or 4): ").strip()

    if choice in ("1", "2", "3", "4"):
        return METHODS[int(choice) - 1]
    print("Invalid choice. Using file logging as default.")
    return "file"


def ask_count(prompt: Optional[Callable[[str], str]] = None) -> int:
    """Ask how many logs to generate, defaulting on empty or invalid input."""
    prompt = prompt or input
    answer = prompt(f"How many logs do you want to generate? (default: {DEFAULT_COUNT}): ").strip()
    try:
        return int(answer)
    except ValueError:
        return DEFAULT_COUNT


def build_sink(method: str, config: DemoConfig) -> tuple[Sink, str]:
    """Create the sink for *method* and describe where logs go.

    Raises:
        LokiConfigurationError: If the config does not support the method.
    """
    if method == "file":
        return FileSink(config.log_file_path), f"file {config.log_file_path}"

    if method == "eventlog":
        return EventLogSink(config.event_log_source), f"event log (Source: {config.event_log_source})"

    if method == "alloy":
        url = validate_alloy(config)
        client = LokiPushClient(url)
        labels = {**BASE_LABELS, "env": "local", "method": "direct-alloy"}
    elif method == "cloud":
        url, credentials = validate_cloud(config)
        client = LokiPushClient(url, credentials=credentials)
        labels = {**BASE_LABELS, "env": "cloud", "method": "grafana-cloud"}
    else:
        raise LokiConfigurationError(f"Unknown logging method {method!r}")

    return LokiPushSink(client, labels), client.endpoint_url


def run(method: str, count: int, config: DemoConfig, delay: bool = True) -> int:
    """Generate *count* logs through *method*. Returns a process exit code."""
    try:
        sink, target = build_sink(method, config)
    except LokiConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    print(f"Will generate {count} logs to {target}...")
    console = ConsoleSink(min_level="info" if method == "file" else "debug")
    try:
        with TeeSink(console, sink) as tee:
            tee.emit("info", f"Demo starting - writing realistic business logs to {target}")
            generate_logs(tee, count, delay=(0.2, 0.8) if delay else None)
            tee.emit("info", f"{method} logging demo completed")
    except LokiEncodingError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    finally:
        if isinstance(sink, LokiPushSink):
            sink.client.close()

    if isinstance(sink, LokiPushSink) and sink.failed_pushes:
        result = sink.last_result
        print(f"ERROR: {sink.failed_pushes} push(es) failed. Last: {result.message}", file=sys.stderr)
        if result.status_code in (401, 403):
            print("Check the Grafana Cloud credentials in the config file.", file=sys.stderr)
        return 1

    print(f"Logs sent to: {target}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except LokiConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    method = args.method or choose_method(config)
    count = args.count if args.count is not None else ask_count()
    return run(method, count, config, delay=not args.no_delay)


if __name__ == "__main__":
    sys.exit(main())
