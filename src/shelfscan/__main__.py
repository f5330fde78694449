"""Main entry point for the shelfscan package."""

from shelfscan.cli import main


if __name__ == "__main__":
    main()
