import sys

from webpage.cli import main

sys.exit(main())
