"""Allow ``python -m kdiff``."""

import sys

from kdiff.cli import main

sys.exit(main())
