import sys

from honeycomb.cli import main

sys.exit(main())
