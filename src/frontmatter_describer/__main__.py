"""Allow ``python -m frontmatter_describer``."""

import sys

from frontmatter_describer.cli import main

sys.exit(main())
