import sys

from pylox.main import main


sys.exit(main())
