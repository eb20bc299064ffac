import sys

from cgbench_report.cli import main

sys.exit(main())
