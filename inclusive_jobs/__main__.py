"""Allow ``python -m inclusive_jobs``."""

import sys

from inclusive_jobs.adapters.cli import main

sys.exit(main())
