import sys

from korisp.cli import main

sys.exit(main())
