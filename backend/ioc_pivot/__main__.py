import sys

from ioc_pivot.cli import main

sys.exit(main())
