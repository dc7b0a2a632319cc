import sys

from memorial.main import main

sys.exit(main())
