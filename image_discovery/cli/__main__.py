"""Allow ``python -m image_discovery.cli`` execution."""

import sys

from image_discovery.cli.search import main

sys.exit(main())
