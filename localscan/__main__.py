from localscan.cli import main

raise SystemExit(main())
