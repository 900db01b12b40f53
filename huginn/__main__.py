import sys

from huginn.cli import main

sys.exit(main())
