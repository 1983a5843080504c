"""
Module entry point for: python -m registry_parser

Allows running the parser directly as a module:
    python -m registry_parser extract <pdf_path> [options]
    python -m registry_parser serve [options]
    python -m registry_parser info <pdf_path>
"""

from .cli import cli


def main():
    cli()


if __name__ == "__main__":
    main()
