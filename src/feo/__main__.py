"""Allow running feo with ``python -m feo``."""

from feo.app import main

main()
