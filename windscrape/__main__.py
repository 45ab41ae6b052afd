import sys

from windscrape.cli import main

sys.exit(main())
