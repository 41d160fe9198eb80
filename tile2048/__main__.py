import sys

from tile2048.cli import main

sys.exit(main())
