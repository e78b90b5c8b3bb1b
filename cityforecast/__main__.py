import sys

from cityforecast.cli import main

sys.exit(main())
