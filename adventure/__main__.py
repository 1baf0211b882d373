import sys

from adventure.core.cli import run

sys.exit(run())
