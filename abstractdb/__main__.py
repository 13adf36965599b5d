import sys

from abstractdb.cli import main

sys.exit(main())
