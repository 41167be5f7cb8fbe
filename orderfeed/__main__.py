import sys

from orderfeed.cli import main

sys.exit(main())
