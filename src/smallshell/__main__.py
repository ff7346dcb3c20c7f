"""Allow ``python -m smallshell``."""

from smallshell.cli import main

main()
