"""Entry point for 'python -m rolebridge' command."""

from rolebridge.cli import main

if __name__ == "__main__":
    main()
