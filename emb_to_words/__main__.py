import sys

from emb_to_words.cli import main

sys.exit(main())
