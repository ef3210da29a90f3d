import sys

from completion_ranker.cli import main

sys.exit(main())
