"""Allow ``python -m ghfeedback``."""

import sys

from ghfeedback.main import main

sys.exit(main())
