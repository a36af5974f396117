"""Allow `python -m imgsrc_client`."""

import sys

from imgsrc_client.cli import main

sys.exit(main())
