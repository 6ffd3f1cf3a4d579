import sys

from ticketdb.main import main

sys.exit(main())
