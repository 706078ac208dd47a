import sys

from katas.cli import main

sys.exit(main())
