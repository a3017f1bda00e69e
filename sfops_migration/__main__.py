import sys

from sfops_migration.cli import main

sys.exit(main())
