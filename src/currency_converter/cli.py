"""Command-line interface for the currency converter."""

import argparse
import asyncio
import sys

from currency_converter import __version__
from currency_converter.config import get_settings
from currency_converter.container import Container
from currency_converter.domain.conversions import ConversionRequest
from currency_converter.domain.value_objects import Currency
from currency_converter.exceptions import CurrencyConverterError
from currency_converter.formatting import display, parse_amount, reformat
from currency_converter.logging_config import configure_logging


def _currency(code: str) -> Currency:
    code = code.upper()
    if not Currency.is_supported(code):
        raise CurrencyConverterError(
            f"Unsupported currency: {code}", error_code="UNSUPPORTED_CURRENCY"
        )
    return Currency(code)


async def _convert(request: ConversionRequest) -> float:
    container = Container(get_settings())
    try:
        record = await container.rate_service.convert(request)
    finally:
        await container.aclose()
    return record.result


async def _rate(from_currency: str, to_currency: str) -> float:
    container = Container(get_settings())
    try:
        rate = await container.rate_service.get_rate(from_currency, to_currency)
    finally:
        await container.aclose()
    return rate.rate


def cmd_version(args: argparse.Namespace) -> int:
    """Show version information."""
    print(f"Currency Converter v{__version__}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "currency_converter.api.app:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload or settings.api_reload,
    )
    return 0


def cmd_ui(args: argparse.Namespace) -> int:
    """Launch the NiceGUI web interface."""
    try:
        from currency_converter.ui.main import run
    except ImportError:
        print("Frontend dependencies are not installed.")
        print("Install with: pip install 'currency-converter[frontend]'")
        return 1

    settings = get_settings()
    run(
        port=args.port or settings.ui_port,
        api_url=args.api_url or settings.ui_api_url,
        reload=False,
        storage_secret=settings.ui_storage_secret,
    )
    return 0


def cmd_convert(args: argparse.Namespace) -> int:
    """Convert an amount typed the way the web UI accepts it."""
    try:
        source = _currency(args.from_currency)
        target = _currency(args.to_currency)
        amount = parse_amount(args.amount)
        if amount <= 0:
            print(f"Error: Invalid value: {args.amount}")
            return 1

        request = ConversionRequest(from_currency=source, to_currency=target, amount=amount)
        result = asyncio.run(_convert(request))
        print(f"{display(amount)} {source.value} = {display(result)} {target.value}")
        return 0

    except CurrencyConverterError as e:
        print(f"Error: {e.message}")
        return 1


def cmd_rate(args: argparse.Namespace) -> int:
    """Show the current rate for a currency pair."""
    try:
        source = _currency(args.from_currency)
        target = _currency(args.to_currency)
        rate = asyncio.run(_rate(source.value, target.value))
        print(f"1 {source.value} = {rate} {target.value}")
        return 0

    except CurrencyConverterError as e:
        print(f"Error: {e.message}")
        return 1


def cmd_format(args: argparse.Namespace) -> int:
    """Show how the amount fields format and parse a piece of text."""
    result = reformat(args.text, len(args.text))
    print(f"Formatted: {result.text}")
    print(f"Parsed:    {parse_amount(result.text)}")
    return 0


def cmd_logs(args: argparse.Namespace) -> int:
    """List recent conversions."""
    try:
        records = list(Container(get_settings()).conversion_log.list_recent(args.limit))
    except OSError as e:
        print(f"Error: {e}")
        return 1

    if not records:
        print("No conversions logged.")
        return 0

    for record in records:
        print(
            f"{record.timestamp:%Y-%m-%d %H:%M:%S}  "
            f"{display(record.amount)} {record.from_currency} -> "
            f"{display(record.result)} {record.to_currency}  "
            f"(rate {record.rate}, {record.ip or '-'})"
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="currency-converter",
        description="Currency Converter - live conversion between USD, BRL, EUR, GBP and PYG",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # version command
    version_parser = subparsers.add_parser("version", help="Show version")
    version_parser.set_defaults(func=cmd_version)

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to listen on")
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload (development only)",
    )
    serve_parser.set_defaults(func=cmd_serve)

    # ui command
    ui_parser = subparsers.add_parser("ui", help="Launch the NiceGUI web interface")
    ui_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to run frontend (default: 8080)",
    )
    ui_parser.add_argument(
        "--api-url",
        default=None,
        help="Backend API base URL (default: http://localhost:3000)",
    )
    ui_parser.set_defaults(func=cmd_ui)

    # convert command
    convert_parser = subparsers.add_parser("convert", help="Convert an amount")
    convert_parser.add_argument("amount", help="Amount, e.g. 1.234,56")
    convert_parser.add_argument(
        "--from", dest="from_currency", default="USD", help="Source currency"
    )
    convert_parser.add_argument(
        "--to", dest="to_currency", default="BRL", help="Target currency"
    )
    convert_parser.set_defaults(func=cmd_convert)

    # rate command
    rate_parser = subparsers.add_parser("rate", help="Show the current exchange rate")
    rate_parser.add_argument("from_currency", help="Source currency")
    rate_parser.add_argument("to_currency", help="Target currency")
    rate_parser.set_defaults(func=cmd_rate)

    # format command
    format_parser = subparsers.add_parser(
        "format", help="Show the formatted and parsed form of an amount"
    )
    format_parser.add_argument("text", help="Amount text")
    format_parser.set_defaults(func=cmd_format)

    # logs command
    logs_parser = subparsers.add_parser("logs", help="Show recent conversions")
    logs_parser.add_argument(
        "--limit", "-n", type=int, default=None, help="Show only the newest N"
    )
    logs_parser.set_defaults(func=cmd_logs)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(get_settings())

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    sys.exit(main())
