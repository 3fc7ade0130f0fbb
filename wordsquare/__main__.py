import sys

from wordsquare.cli import main

sys.exit(main())
