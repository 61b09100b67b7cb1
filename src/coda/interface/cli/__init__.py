"""coda CLI.

- core/ - Entry point, theme and error handling
- commands/ - Command groups (*_cmd.py files)
- diff/ - Interactive diff review
"""

# Only export the main entry points - everything else should be imported directly
from coda.interface.cli.core.main import cli_entrypoint, main

__all__ = ["cli_entrypoint", "main"]
