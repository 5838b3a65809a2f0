import sys

from jobboard.main import main

sys.exit(main())
