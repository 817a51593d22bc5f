import sys

from prismreplay.cli import main

sys.exit(main())
