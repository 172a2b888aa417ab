from surfcheck.cli import main

raise SystemExit(main())
