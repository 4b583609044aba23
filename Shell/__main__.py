import sys

from Shell.shell import main

sys.exit(main())
