import sys

from git_grove.cli.main import main

sys.exit(main())
