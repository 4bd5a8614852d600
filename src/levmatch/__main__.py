import sys

from levmatch.cli import main

sys.exit(main())
