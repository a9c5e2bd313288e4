from raster_paginator.cli import main

raise SystemExit(main())
