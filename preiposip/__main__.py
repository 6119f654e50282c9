import sys

from preiposip.cli import main

sys.exit(main())
