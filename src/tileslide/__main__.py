import sys

from tileslide.cli import main

sys.exit(main())
