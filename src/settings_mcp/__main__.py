"""Allow ``python -m settings_mcp``."""

import sys

from settings_mcp.cli import main

sys.exit(main())
