import sys

from vtail_trim.cli import main

sys.exit(main())
