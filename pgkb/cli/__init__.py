"""CLI tools for pgkb.

- ``python -m pgkb.cli schema`` - print example DDL for the two tables.
- ``python -m pgkb.cli demo`` - create / append / query / delete walkthrough.
- ``python -m pgkb.cli query`` - nearest-neighbour query, JSON lines output.
"""
