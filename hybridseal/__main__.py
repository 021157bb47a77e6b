import sys

from hybridseal.cli import main

sys.exit(main())
