"""Allow ``python -m mono_import``."""

from .cli import main

main()
