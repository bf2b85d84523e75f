"""Allow ``python -m quillpen.cli`` execution."""

import sys

from quillpen.cli.main import main

sys.exit(main())
