"""Allow ``python -m pgkb.cli`` execution."""

from pgkb.cli.store import main

main()
