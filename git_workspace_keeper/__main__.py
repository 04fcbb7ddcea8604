import sys

from git_workspace_keeper.cli.main import main

sys.exit(main())
