"""
Composition root and command line entry point.

Usage:
    bulk-notifier email --subject "Spring sale" --message-file body.html recipients.json
    bulk-notifier sms --message "Your order has shipped" recipients.json
    bulk-notifier test-email --to admin@example.com --subject "Hello" --message "<p>Hi</p>"

recipients.json holds a list of {"name": ..., "address": ...} objects.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

import structlog

from .application.services import (
    EMAIL_RETRY_POLICY,
    SMS_RETRY_POLICY,
    BulkDispatcher,
    NotificationService,
    RetryExecutor,
    RetryPolicy,
)
from .channels import MockFallbackSink
from .config import Settings
from .domain.errors import InvalidRecipientError, NotificationError
from .domain.models import BatchSummary, ChannelType, Recipient
from .infrastructure.adapters import ProviderRegistry, TransportFactory
from .infrastructure.logging import configure_logging

logger = structlog.get_logger()


def create_notification_service(settings: Settings) -> NotificationService:
    """Wire the pipeline for both channels from one settings object."""
    registry = ProviderRegistry(settings)
    factory = TransportFactory(email_sender_name=settings.email_from_name)

    def dispatcher(channel: ChannelType, policy: RetryPolicy) -> BulkDispatcher:
        return BulkDispatcher(
            channel=channel,
            registry=registry,
            factory=factory,
            executor=RetryExecutor(policy, fallback=MockFallbackSink.fallback(channel)),
            mock_sink=MockFallbackSink(channel),
        )

    return NotificationService(
        email_dispatcher=dispatcher(ChannelType.EMAIL, EMAIL_RETRY_POLICY),
        sms_dispatcher=dispatcher(ChannelType.SMS, SMS_RETRY_POLICY),
    )


def load_recipients(path: Path) -> list[Recipient]:
    """Read a JSON list of {name, address} objects."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError("Recipients file must contain a JSON list")
    recipients = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise InvalidRecipientError(str(item), index, "entry must be an object with an address")
        address = item.get("address")
        if not isinstance(address, str):
            raise InvalidRecipientError(str(address), index, "address must be a string")
        name = item.get("name", "")
        if not isinstance(name, str):
            raise InvalidRecipientError(address, index, "name must be a string")
        recipients.append(Recipient(name=name, address=address))
    return recipients


def _message(args: argparse.Namespace) -> str:
    if args.message_file:
        return Path(args.message_file).read_text(encoding="utf-8")
    return args.message or ""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bulk-notifier", description="Send bulk email and SMS notifications")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_message_args(p: argparse.ArgumentParser) -> None:
        group = p.add_mutually_exclusive_group(required=True)
        group.add_argument("--message", help="Message body")
        group.add_argument("--message-file", help="Read the message body from a file")

    email = sub.add_parser("email", help="Send an email to every recipient")
    email.add_argument("recipients", type=Path, help="JSON file of recipients")
    email.add_argument("--subject", required=True)
    add_message_args(email)

    sms = sub.add_parser("sms", help="Send an SMS to every recipient")
    sms.add_argument("recipients", type=Path, help="JSON file of recipients")
    add_message_args(sms)

    test = sub.add_parser("test-email", help="Send a [TEST] email to one address")
    test.add_argument("--to", required=True)
    test.add_argument("--name", default="Admin")
    test.add_argument("--subject", required=True)
    add_message_args(test)

    return parser


async def run(args: argparse.Namespace, service: NotificationService) -> BatchSummary:
    message = _message(args)
    if args.command == "email":
        return await service.send_bulk_email(load_recipients(args.recipients), args.subject, message)
    if args.command == "sms":
        return await service.send_bulk_sms(load_recipients(args.recipients), message)
    return await service.send_test_email(Recipient(name=args.name, address=args.to), args.subject, message)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    settings = Settings()
    configure_logging(settings.service_name)
    service = create_notification_service(settings)

    try:
        summary = asyncio.run(run(args, service))
    except (NotificationError, ValueError, OSError) as e:
        logger.error("Invalid input", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(json.dumps(summary.to_dict(), indent=2, ensure_ascii=False))
    return 0 if summary.failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
