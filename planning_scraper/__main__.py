import sys

from planning_scraper.main import main

sys.exit(main())
