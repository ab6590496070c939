"""Allow running as python -m ssdlife."""

import sys

from ssdlife.cli import main

sys.exit(main())
