"""Allow ``python -m feishu2md``."""

import sys

from feishu2md.cli import main

sys.exit(main())
