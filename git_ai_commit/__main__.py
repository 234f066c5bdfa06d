import sys

from git_ai_commit.cli import main

sys.exit(main())
