import sys

from aichangelog.cli.main import main

sys.exit(main())
