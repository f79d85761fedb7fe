import sys

from shamirvote.cli import main

sys.exit(main())
