import sys

from bigsort.cli import main

sys.exit(main())
