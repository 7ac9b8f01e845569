from __future__ import annotations

import sys

from scriptdeps.main import main

sys.exit(main())
