import sys

from lighthouse_batch.cli import main

sys.exit(main())
