import sys

from pr_review.action import main


sys.exit(main())
