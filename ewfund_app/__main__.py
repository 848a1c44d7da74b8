"""Allow ``python -m ewfund_app``."""

import sys

from .cli import main

sys.exit(main())
