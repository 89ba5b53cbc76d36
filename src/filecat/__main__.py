from filecat.cli import main

raise SystemExit(main())
