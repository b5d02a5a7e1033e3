import sys

from courtplanner.cli import main

sys.exit(main())
