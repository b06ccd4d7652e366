"""Allow ``python -m src.cli`` execution (runs the offline matcher)."""

from src.cli.match import main

main()
