from simple_api.cli import main

raise SystemExit(main())
