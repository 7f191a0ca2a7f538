import sys

from hydrostab.cli import main

sys.exit(main())
