"""
Command-line interface for the RSO translation service.

Provides CLI commands for running and inspecting the service:
- run: Start the API server
- config: Print the effective configuration (secrets are never shown)

Usage:
    rso-translator run [--host HOST] [--port PORT]
    rso-translator config

Environment Variables:
    RSO_HOST: Host to bind the API server (default: 0.0.0.0)
    RSO_PORT: Port for the API server (default: 8080)
    OPENAI_API_KEY: API key for the inference backend
    AXIOM_DATASET / AXIOM_TOKEN: Ship logs to Axiom when both are set
"""

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def cmd_run(args: argparse.Namespace) -> int:
    """
    Start the API server with uvicorn.

    Host and port resolution order:
    1. CLI argument (--host / --port)
    2. RSO_HOST / RSO_PORT environment variables
    3. config/server.ini
    4. Built-in defaults (0.0.0.0:8080)

    Returns:
        Exit code (0 for success, 1 when the server could not start).
    """
    import uvicorn

    from rso_translator.api.server import create_app
    from rso_translator.config import config
    from rso_translator.logging_config import configure_logging

    configure_logging(config.logging)

    host = getattr(args, "host", None) or config.server.host
    port = getattr(args, "port", None) or config.server.port

    if not config.inference.api_key:
        logger.warning("OPENAI_API_KEY is not set; translation requests will fail.")

    try:
        app = create_app(config)
        logger.info("Server listening at http://%s:%d", host, port)
        uvicorn.run(app, host=host, port=port, log_config=None)
        return 0

    except KeyboardInterrupt:
        print("\nServer stopped.")
        return 0

    except Exception:
        logger.exception("Error starting server")
        return 1


def cmd_config(args: argparse.Namespace) -> int:
    """Print the configuration summary."""
    from rso_translator.config import print_config_summary

    print_config_summary()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="rso-translator",
        description="RSO AI Microservice - LLM-backed key/value string translation",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Run the translation API server",
        description="Start the FastAPI server with uvicorn.",
    )
    run_parser.add_argument(
        "--port",
        "-p",
        type=int,
        help="API server port (default: 8080, or RSO_PORT env var)",
    )
    run_parser.add_argument(
        "--host",
        type=str,
        help="Host to bind the server to (default: 0.0.0.0, or RSO_HOST env var)",
    )
    run_parser.set_defaults(func=cmd_run)

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Show the effective configuration",
        description="Print configuration sources and values. Secrets are reported as set/unset.",
    )
    config_parser.set_defaults(func=cmd_config)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
