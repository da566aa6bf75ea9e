"""Entry point for ``python -m dismal``."""

import sys

from dismal.main import main

sys.exit(main())
