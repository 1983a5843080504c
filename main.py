"""
Business Registry API — Main Entry Point
========================================
Starts the Flask-based business registry service.

Usage:
    python main.py                        # Default: 0.0.0.0:$PORT (3000)
    python main.py --port 8000            # Custom port
    python main.py --pdf may-2025.pdf     # Registry PDF to serve
    python main.py --debug                # Debug mode
"""

import argparse
import logging
import os

from registry_parser.server import app, create_app

logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] %(levelname)-8s %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Business Registry API")
    parser.add_argument("--host", default="0.0.0.0", help="Bind host")
    parser.add_argument(
        "--port", type=int, default=int(os.environ.get("PORT", 3000)),
        help="Bind port",
    )
    parser.add_argument("--pdf", default=None, help="Registry PDF path")
    parser.add_argument("--debug", action="store_true", help="Debug mode")
    args = parser.parse_args()

    create_app({"BUSINESS_PDF_PATH": args.pdf} if args.pdf else None)

    logger.info(f"Serving businesses from: {app.config['BUSINESS_PDF_PATH']}")
    logger.info(f"Listening on port {args.port}.")
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
