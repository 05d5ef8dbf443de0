"""Allow running with ``python -m prizewheel``."""

from prizewheel.main import main

main()
