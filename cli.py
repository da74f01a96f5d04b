#!/usr/bin/env python3
"""
Command-line interface for the customer analysis system.

Usage:
    uv run python cli.py [command] [options]

Commands:
    demo        Run demo scenarios
    offers      Prepare offers for a product
    test        Run the test suite
    serve       Start the API server

Examples:
    uv run python cli.py demo fallback
    uv run python cli.py demo all
    uv run python cli.py offers 2
    uv run python cli.py serve
"""

import argparse
import subprocess
import sys


def run_demo(scenario: str) -> None:
    """Run a demo scenario."""
    if scenario == "fallback":
        from customer_analysis.demo import run_fallback_demo
        run_fallback_demo()
    elif scenario == "offers":
        from customer_analysis.demo import run_offers_demo
        run_offers_demo()
    elif scenario == "all":
        from customer_analysis.demo import run_fallback_demo, run_offers_demo
        run_fallback_demo()
        run_offers_demo()
    else:
        print(f"Unknown scenario: {scenario}")
        sys.exit(1)


def run_offers(product_id: int, data_dir: str, write_through: bool) -> None:
    """Prepare offers for one product and report what was announced."""
    from customer_analysis.analysis import CustomerAnalysis
    from customer_analysis.error_handler import LoggingFailureHandler
    from customer_analysis.strategies import default_strategies
    from shared.channels import NewsListChannel
    from shared.data_store import DataStore
    from shared.errors import CustomerAnalysisError

    data_store = DataStore(data_dir=data_dir, write_through=write_through)
    channel = NewsListChannel()
    analysis = CustomerAnalysis(
        strategies=default_strategies(data_store),
        store=data_store,
        channel=channel,
        failure_handler=LoggingFailureHandler(),
    )

    try:
        analysis.prepare_offer_for_product(product_id)
    except CustomerAnalysisError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Announced {channel.get_sent_count()} offers for product {product_id}")


def run_tests(args: list[str]) -> None:
    """Run the test suite."""
    cmd = ["uv", "run", "pytest"] + args
    subprocess.run(cmd)


def run_server(host: str, port: int, reload: bool) -> None:
    """Start the API server."""
    cmd = ["uv", "run", "uvicorn", "api.main:app", f"--host={host}", f"--port={port}"]
    if reload:
        cmd.append("--reload")

    print(f"Starting server at http://{host}:{port}")
    print(f"API docs available at http://{host}:{port}/docs")
    subprocess.run(cmd)


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Customer Analysis CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s demo fallback
  %(prog)s demo all
  %(prog)s offers 2 --write-through
  %(prog)s test -v
  %(prog)s serve --reload
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run demo scenarios")
    demo_parser.add_argument(
        "scenario",
        choices=["fallback", "offers", "all"],
        help="Which scenario to run",
    )

    # Offers command
    offers_parser = subparsers.add_parser("offers", help="Prepare offers for a product")
    offers_parser.add_argument("product_id", type=int, help="Product to make offers for")
    offers_parser.add_argument("--data-dir", default=None, help="Directory with JSON fixtures")
    offers_parser.add_argument(
        "--write-through",
        action="store_true",
        help="Write persisted offers to offers.json",
    )

    # Test command
    test_parser = subparsers.add_parser("test", help="Run the test suite")
    test_parser.add_argument(
        "pytest_args",
        nargs="*",
        default=[],
        help="Arguments to pass to pytest",
    )

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")

    args = parser.parse_args()

    if args.command == "demo":
        run_demo(args.scenario)
    elif args.command == "offers":
        run_offers(args.product_id, args.data_dir, args.write_through)
    elif args.command == "test":
        run_tests(args.pytest_args)
    elif args.command == "serve":
        run_server(args.host, args.port, args.reload)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
