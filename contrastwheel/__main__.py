"""Launch the contrast wheel: ``python -m contrastwheel``."""

import sys

from contrastwheel.ui.dpg.app import main

if __name__ == "__main__":
    sys.exit(main())
