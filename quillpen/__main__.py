"""Allow ``python -m quillpen`` execution."""

import sys

from quillpen.cli.main import main

sys.exit(main())
